# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""HTTP middleware for correlation ID propagation."""

import logging

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from ..utils.correlation import generate_correlation_id, set_correlation_id

logger = logging.getLogger(__name__)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """
    FastAPI middleware that generates and manages correlation IDs.

    This middleware:
    1. Checks for an existing correlation ID in request headers
    2. Generates a new one if not present
    3. Sets it in the request context for use throughout the request
    4. Adds it to the response headers for client tracking
    """

    CORRELATION_ID_HEADER = "X-Correlation-ID"

    async def dispatch(
        self,
        request: Request,
        call_next,
    ) -> Response:
        """
        Process the request and add correlation ID tracking.

        Args:
            request: The incoming HTTP request
            call_next: The next middleware/handler in the chain

        Returns:
            The response with correlation ID in headers
        """
        correlation_id = request.headers.get(self.CORRELATION_ID_HEADER, None)

        if not correlation_id:
            correlation_id = generate_correlation_id()

        set_correlation_id(correlation_id)

        logger.debug(
            f"Request started: {request.method} {request.url.path}",
            extra={"correlation_id": correlation_id},
        )

        response = await call_next(request)

        response.headers[self.CORRELATION_ID_HEADER] = correlation_id

        logger.debug(
            f"Request completed with status {response.status_code}",
            extra={"correlation_id": correlation_id},
        )

        return response

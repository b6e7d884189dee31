# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Correlation ID generation and context management for request tracing.

This module provides utilities for generating unique correlation IDs,
keeping them in request context, and stamping them onto log records so a
request's fan-out can be followed through the logs.
"""

import contextvars
import logging
import uuid

# Context variable to store correlation ID per request
_correlation_id_context: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def generate_correlation_id() -> str:
    """
    Generate a unique correlation ID using UUID4.

    Returns:
        A unique correlation ID string in UUID4 format
    """
    return str(uuid.uuid4())


def set_correlation_id(correlation_id: str) -> None:
    """
    Set the correlation ID in the current context.

    Args:
        correlation_id: The correlation ID to set
    """
    _correlation_id_context.set(correlation_id)


def get_correlation_id() -> str:
    """
    Get the correlation ID from the current context.

    Returns:
        The correlation ID if set, or an empty string if not set
    """
    return _correlation_id_context.get()


class CorrelationIdFilter(logging.Filter):
    """
    Logging filter that adds ``correlation_id`` to every record.

    Tasks spawned by the fan-out copy the request's context, so zone probe
    logs carry the same id as the request that spawned them. Records logged
    outside a request get ``-``.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id() or "-"
        return True

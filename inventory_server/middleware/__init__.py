"""Middleware for the inventory server."""

from .correlation_middleware import CorrelationIDMiddleware
from .cors_middleware import get_cors_config, parse_cors_origins

__all__ = [
    "CorrelationIDMiddleware",
    "get_cors_config",
    "parse_cors_origins",
]

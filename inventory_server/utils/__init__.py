"""Utility modules for the GCP Resource Inventory Server."""

from .cloud_logging import configure_cloud_logging
from .correlation import CorrelationIdFilter, get_correlation_id, set_correlation_id
from .error_sanitization import redact_sensitive_info

__all__ = [
    "configure_cloud_logging",
    "CorrelationIdFilter",
    "get_correlation_id",
    "set_correlation_id",
    "redact_sensitive_info",
]

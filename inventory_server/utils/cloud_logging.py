"""Google Cloud Logging configuration."""

import logging
import sys
from typing import Optional

from google.cloud import logging as cloud_logging
from google.cloud.logging.handlers import CloudLoggingHandler

from .correlation import CorrelationIdFilter


def configure_cloud_logging(
    project_id: Optional[str] = None,
    log_name: str = "gcp-resource-inventory",
    enable: bool = True,
) -> Optional[CloudLoggingHandler]:
    """
    Ship application logs to Google Cloud Logging.

    Adds a CloudLoggingHandler to the root logger. Failures to set up the
    handler (no credentials, API disabled) are reported on stderr and never
    raised, so logging problems cannot stop the server.

    Args:
        project_id: Project to write logs to (default: the client's project)
        log_name: Cloud Logging log name
        enable: Whether to enable Cloud Logging

    Returns:
        The installed handler, or None if disabled or setup failed
    """
    if not enable:
        return None

    try:
        client = cloud_logging.Client(project=project_id)
        handler = CloudLoggingHandler(client, name=log_name)
        handler.setFormatter(
            logging.Formatter("%(name)s - %(levelname)s - [%(correlation_id)s] %(message)s")
        )
        handler.addFilter(CorrelationIdFilter())

        logging.getLogger().addHandler(handler)

        logging.getLogger(__name__).info(
            f"Cloud Logging configured: project={client.project}, log={log_name}"
        )
        return handler
    except Exception as e:
        print(f"Failed to configure Cloud Logging: {e}", file=sys.stderr)
        return None

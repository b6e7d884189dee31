# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

#!/usr/bin/env python3
"""
Main entry point for the GCP Resource Inventory Server.

This script loads settings from the environment (and .env), applies any
command-line overrides, and starts the FastAPI server on the configured
port (default: 8080).

Usage:
    python run_server.py
    python run_server.py --id web-1        # pin every lookup to one resource

Or with uvicorn directly (environment configuration only):
    uvicorn inventory_server.main:app --host 0.0.0.0 --port 8080
"""

import argparse
import logging
import os
import sys
from typing import Optional

# Add the project root to the path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

import uvicorn

from inventory_server.config import Settings, settings
from inventory_server.utils.correlation import CorrelationIdFilter


def configure_logging(log_level: str) -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s",
        handlers=[handler],
        force=True,
    )

    # Set uvicorn loggers to the same level
    logging.getLogger("uvicorn").setLevel(numeric_level)
    logging.getLogger("uvicorn.access").setLevel(numeric_level)
    logging.getLogger("uvicorn.error").setLevel(numeric_level)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    """Parse command-line overrides."""
    parser = argparse.ArgumentParser(description="GCP Resource Inventory Server")
    parser.add_argument(
        "--id",
        dest="resource_id",
        default=None,
        help="The ID of the resource to fetch; pins every lookup to this resource",
    )
    parser.add_argument("--host", default=None, help="Host to bind to")
    parser.add_argument("--port", type=int, default=None, help="Port to listen on")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return parser.parse_args(argv)


def apply_overrides(config: Settings, args: argparse.Namespace) -> Settings:
    """
    Return a copy of the settings with command-line values applied.

    Options left unset on the command line keep their configured value.
    """
    overrides = {
        key: value
        for key, value in {
            "resource_id": args.resource_id,
            "host": args.host,
            "port": args.port,
            "log_level": args.log_level,
        }.items()
        if value is not None
    }
    if not overrides:
        return config
    return config.model_copy(update=overrides)


def print_startup_banner(config: Settings) -> None:
    """
    Print startup banner with configuration information.

    Args:
        config: Application settings
    """
    from inventory_server import __version__

    pinned = config.resource_id or "(none)"
    banner = f"""
======================================================================
  GCP Resource Inventory Server v{__version__}
----------------------------------------------------------------------
  Host:         {config.host}
  Port:         {config.port}
  Environment:  {config.environment}
  Log Level:    {config.log_level}
  Project:      {config.project_id}
  Credentials:  {config.credentials_file or "(application default)"}
  Pinned ID:    {pinned}
----------------------------------------------------------------------
  Health:       http://{config.host}:{config.port}/health
  Resources:    http://{config.host}:{config.port}/api/resources
  By name:      http://{config.host}:{config.port}/api/resources/{{id}}
======================================================================
"""
    print(banner)


def main(argv: Optional[list[str]] = None) -> None:
    """
    Main entry point for the inventory server.

    Loads configuration, configures logging, and starts the server.
    """
    config = apply_overrides(settings(), parse_args(argv))

    configure_logging(config.log_level)

    logger = logging.getLogger(__name__)

    print_startup_banner(config)

    logger.info("Starting GCP Resource Inventory Server...")
    logger.info(f"Server will listen on {config.host}:{config.port}")

    if config.credentials_file and not os.path.exists(config.credentials_file):
        logger.warning(
            f"Credentials file not found at {config.credentials_file}. "
            "Falling back to Application Default Credentials."
        )

    from inventory_server.main import create_app

    try:
        uvicorn.run(
            create_app(config),
            host=config.host,
            port=config.port,
            log_level=config.log_level.lower(),
            access_log=True,
        )
    except KeyboardInterrupt:
        logger.info("Server shutdown requested")
    except Exception as e:
        logger.error(f"Server failed to start: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()

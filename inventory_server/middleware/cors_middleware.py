# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""CORS configuration helpers for the inventory server.

CORS itself is enforced by Starlette's CORSMiddleware; this module turns the
configured origins string into that middleware's keyword arguments.
"""


def parse_cors_origins(origins_str: str) -> list[str]:
    """
    Parse a comma-separated string of CORS origins.

    Args:
        origins_str: Comma-separated list of origins or "*"

    Returns:
        List of origins (empty list if none configured)
    """
    if not origins_str:
        return []

    # Handle wildcard
    if origins_str.strip() == "*":
        return ["*"]

    origins = [o.strip() for o in origins_str.split(",") if o.strip()]
    return origins


def get_cors_config(allowed_origins: list[str]) -> dict:
    """
    Build CORS configuration from allowed origins.

    The API is read-only, so only GET (and the OPTIONS preflight) is
    allowed. A wildcard origin allows any header, matching a default
    browser-frontend setup.

    Args:
        allowed_origins: List of allowed origins

    Returns:
        Dictionary of CORSMiddleware keyword arguments
    """
    is_wildcard = "*" in allowed_origins

    return {
        "allow_origins": allowed_origins,
        "allow_credentials": False,
        "allow_methods": ["GET", "OPTIONS"],
        "allow_headers": (
            ["*"]
            if is_wildcard
            else ["Content-Type", "X-Correlation-ID"]
        ),
        "expose_headers": ["X-Correlation-ID", "X-Zone-Errors", "X-Partial-Result"],
    }

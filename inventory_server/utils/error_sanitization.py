# Copyright (c) 2025-2026 OptimNow. All Rights Reserved.
# Licensed under the Apache License, Version 2.0.
# See LICENSE file in the project root for full license information.

"""Error message sanitization utility for the inventory server.

Upstream Compute Engine and auth errors can quote credential file paths,
service-account emails or tokens. This module redacts such details before
an error message is placed in an HTTP response body.
"""

import logging
import re

logger = logging.getLogger(__name__)

# Patterns for detecting sensitive information in error messages
SENSITIVE_PATTERNS = {
    # File paths (absolute and relative)
    "file_path": [
        r"[/\\](?:home|root|var|etc|opt|srv|usr|tmp)[/\\][\w\-./\\]+",
        r"[A-Za-z]:\\[\w\-./\\]+",  # Windows paths
        r"/[\w\-./]+\.json",  # Credential files
    ],
    # GCP credentials and keys
    "credentials": [
        r"\"private_key_id\"\s*:\s*\"[0-9a-f]+\"",
        r"-----BEGIN [A-Z ]*PRIVATE KEY-----[^-]*-----END [A-Z ]*PRIVATE KEY-----",
        r"ya29\.[\w\-.]+",  # OAuth2 access tokens
        r"(?i)api[_-]?key['\"]?\s*[:=]\s*['\"]?[^\s'\"]+",
        r"(?i)token['\"]?\s*[:=]\s*['\"]?[^\s'\"]+",
        r"(?i)secret['\"]?\s*[:=]\s*['\"]?[^\s'\"]+",
    ],
    # Email addresses (service accounts included)
    "email": [
        r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}",
    ],
    # Stack traces and internal details
    "stack_trace": [
        r"(?i)traceback|File \"[^\"]+\", line \d+",
    ],
}

# Compile patterns for performance
COMPILED_PATTERNS = {
    category: [re.compile(pattern) for pattern in patterns]
    for category, patterns in SENSITIVE_PATTERNS.items()
}


def detect_sensitive_info(text: str) -> dict[str, list[str]]:
    """
    Detect sensitive information in text.

    Args:
        text: Text to scan for sensitive information

    Returns:
        Dictionary mapping sensitivity categories to the matched substrings
    """
    if not text:
        return {}

    found = {}
    for category, patterns in COMPILED_PATTERNS.items():
        matches = [m.group(0) for pattern in patterns for m in pattern.finditer(text)]
        if matches:
            found[category] = matches

    return found


def redact_sensitive_info(text: str, replacement: str = "[REDACTED]") -> str:
    """
    Redact sensitive information from text.

    Args:
        text: Text to redact
        replacement: String to use for redacted content

    Returns:
        Text with sensitive information redacted
    """
    if not text:
        return text

    result = text
    for patterns in COMPILED_PATTERNS.values():
        for pattern in patterns:
            result = pattern.sub(replacement, result)

    if result != text:
        logger.debug("Redacted sensitive information from error message")

    return result

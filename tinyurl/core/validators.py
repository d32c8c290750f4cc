"""
Input Validators

Validation for submitted URLs. URLs are checked but never rewritten:
whatever passes is stored exactly as submitted.
"""

from typing import Optional
from urllib.parse import urlparse

ALLOWED_SCHEMES = {"http", "https"}


def url_rejection_reason(url: str, max_length: int = 2048) -> Optional[str]:
    """
    Check a submitted URL.

    Args:
        url: The URL as submitted
        max_length: Maximum allowed length (default: 2048 per RFC 7230)

    Returns:
        None if the URL is acceptable, otherwise a short reason
    """
    if not isinstance(url, str) or not url.strip():
        return "URL must not be empty"

    if len(url) > max_length:
        return f"URL exceeds {max_length} characters"

    try:
        url.encode("utf-8")
    except UnicodeEncodeError:
        return "URL must be valid UTF-8"

    if url != url.strip() or any(ch.isspace() for ch in url):
        return "URL must not contain whitespace"

    # NUL and other control characters are rejected by PostgreSQL TEXT
    if any(ord(ch) < 0x20 or ord(ch) == 0x7f for ch in url):
        return "URL must not contain control characters"

    try:
        result = urlparse(url)
    except ValueError:
        return "URL could not be parsed"

    if result.scheme.lower() not in ALLOWED_SCHEMES:
        return "URL must use http:// or https://"

    if not result.netloc:
        return "URL must include a host"

    return None

"""
URL validation utilities.
"""

import re
from typing import Tuple, Optional


def validate_url(url: str, allow_empty: bool = False) -> Tuple[bool, Optional[str]]:
    """
    Validate a URL format.

    Args:
        url: The URL to validate
        allow_empty: If True, empty URLs are considered valid

    Returns:
        Tuple of (is_valid: bool, error_message: Optional[str])
    """
    if allow_empty and not url:
        return True, None

    if not url:
        return False, "URL cannot be empty"

    # URL validation pattern
    pattern = re.compile(
        r"^(?:http|https)://"  # http:// or https://
        r"(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+(?:[A-Z]{2,6}\.?|[A-Z0-9-]{2,}\.?)|"  # domain
        r"localhost|"  # localhost
        r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})"  # IP address
        r"(?::\d+)?"  # optional port
        r"(?:/?|[/?]\S+)$",  # path
        re.IGNORECASE,
    )

    if pattern.match(url):
        return True, None

    return False, "Invalid URL format. Must be a valid HTTP/HTTPS URL."


def validate_https_url(url: str) -> Tuple[bool, Optional[str]]:
    """
    Validate a URL that serves installer scripts or archives.

    Anything fetched and executed must come over HTTPS.
    """
    is_valid, error = validate_url(url)
    if not is_valid:
        return is_valid, error

    if not url.lower().startswith("https://"):
        return False, "Installer and download URLs must use https://"

    return True, None

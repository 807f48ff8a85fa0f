"""
Email validation for SSH key comments.
"""

import re
from typing import Tuple, Optional

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def validate_email(email: str, allow_empty: bool = False) -> Tuple[bool, Optional[str]]:
    """
    Validate an email-like identifier.

    Only the general shape is checked; the value ends up as a key comment,
    not as a deliverable address.

    Args:
        email: The value to validate
        allow_empty: If True, empty values are considered valid

    Returns:
        Tuple of (is_valid: bool, error_message: Optional[str])
    """
    if allow_empty and not email:
        return True, None

    if not email:
        return False, "Email cannot be empty"

    if not _EMAIL_RE.match(email):
        return False, "Invalid email format. Expected something like you@example.com"

    return True, None

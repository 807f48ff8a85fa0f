"""
Validation utilities for the devsetup package.
"""

from devsetup.validators.urls import validate_url
from devsetup.validators.email import validate_email

__all__ = [
    "validate_url",
    "validate_email",
]

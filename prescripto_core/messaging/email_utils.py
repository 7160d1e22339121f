"""
Email Utilities
===============
Light validation and masking of email addresses.
"""

import re

_EMAIL_RE = re.compile(r'^[^@\s]+@[^@\s]+\.[^@\s]+$')


def validate_email(email: str) -> bool:
    """Check that an address has a local part, a domain and a dot in the domain."""
    return bool(email and _EMAIL_RE.match(email.strip()))


def mask_email(email: str) -> str:
    """
    Mask the local part of an email address for logging.

    ``maria.lopez@example.com`` becomes ``m***@example.com``.
    """
    if not email or "@" not in email:
        return "***"
    local, _, domain = email.partition("@")
    return f"{local[:1]}***@{domain}"

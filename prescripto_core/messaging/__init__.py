"""
Messaging Utilities
===================
Recipient normalization and log-safe masking for SMS and email.
"""

from .phone_utils import validate_e164, normalize_phone, to_msisdn, mask_phone
from .email_utils import validate_email, mask_email

__all__ = [
    "validate_e164",
    "normalize_phone",
    "to_msisdn",
    "mask_phone",
    "validate_email",
    "mask_email",
]

"""
Phone Utilities
===============
Functions for phone number validation, normalization and masking.
"""

import re


def validate_e164(phone: str) -> bool:
    """
    Validate E.164 phone number format.

    Args:
        phone: Phone number

    Returns:
        True if valid E.164 format
    """
    pattern = r'^\+[1-9]\d{1,14}$'
    return bool(re.match(pattern, phone))


def normalize_phone(phone: str, default_country: str = "34") -> str:
    """
    Normalize a phone number to E.164 format.

    Args:
        phone: Raw phone number
        default_country: Country code (without +) for national numbers

    Returns:
        E.164 formatted number
    """
    digits = re.sub(r'\D', '', phone)

    if phone.strip().startswith('+'):
        return f"+{digits}"

    # International prefix dialled as 00
    if digits.startswith('00'):
        return f"+{digits[2:]}"

    # Spanish national numbers are 9 digits
    if len(digits) == 9:
        return f"+{default_country}{digits}"

    return f"+{digits}"


def to_msisdn(phone: str, default_country: str = "34") -> str:
    """
    Convert a phone number to the bare MSISDN form bulk-SMS APIs expect.

    Args:
        phone: Raw or E.164 phone number
        default_country: Country code used for national numbers

    Returns:
        Digits only, country code first, no leading +
    """
    return normalize_phone(phone, default_country).lstrip('+')


def mask_phone(phone: str) -> str:
    """Mask all but the last 3 digits of a phone number for logging."""
    digits = re.sub(r'\D', '', phone or "")
    if len(digits) <= 3:
        return "***"
    return f"{'*' * (len(digits) - 3)}{digits[-3:]}"

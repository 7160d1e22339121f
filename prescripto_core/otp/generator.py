"""
OTP Generator
=============
Numeric one-time codes backed by the OTP store.
"""

import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional

import structlog

from prescripto_core.config import OTPSettings

from .exceptions import ValidationError
from .models import OtpEntry, OtpInfo, normalize_identifier, utc_now
from .store import OTPStore

logger = structlog.get_logger(__name__)


def generate_code(digits: int = 6) -> str:
    """
    Generate a secure random numeric code.

    Args:
        digits: Number of digits

    Returns:
        Code of exactly ``digits`` characters
    """
    if digits < 1:
        raise ValidationError("OTP length must be at least 1 digit")
    low = 10 ** (digits - 1)
    high = 10 ** digits - 1
    code = low + secrets.randbelow(high - low + 1)
    return str(code).zfill(digits)


class OTPGenerator:
    """Issues codes and records them in the store."""

    def __init__(
        self,
        store: OTPStore,
        settings: Optional[OTPSettings] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.store = store
        self.settings = settings or OTPSettings()
        self.clock = clock

    def create_entry(
        self,
        identifier: str,
        digits: Optional[int] = None,
        expiry_minutes: Optional[int] = None,
    ) -> OtpEntry:
        """
        Generate a code for ``identifier`` and store it.

        Any existing entry for the identifier is replaced.

        Args:
            identifier: Email address or phone number
            digits: Code length (defaults to settings)
            expiry_minutes: Validity window (defaults to settings)

        Returns:
            The stored entry, plaintext code included
        """
        identifier = normalize_identifier(identifier)
        if not identifier:
            raise ValidationError("An identifier is required to generate an OTP")

        digits = self.settings.digits if digits is None else digits
        expiry_minutes = self.settings.expiry_minutes if expiry_minutes is None else expiry_minutes
        if expiry_minutes < 0:
            raise ValidationError("OTP expiry cannot be negative")

        now = self.clock()
        entry = OtpEntry(
            identifier=identifier,
            code=generate_code(digits),
            created_at=now,
            expires_at=now + timedelta(minutes=expiry_minutes),
        )
        self.store.put(identifier, entry)

        logger.info("OTP generated", digits=digits, expires_in_minutes=expiry_minutes)
        return entry

    def generate(
        self,
        identifier: str,
        digits: Optional[int] = None,
        expiry_minutes: Optional[int] = None,
    ) -> str:
        """Store a fresh code for ``identifier`` and return the plaintext code."""
        return self.create_entry(identifier, digits, expiry_minutes).code

    def get_info(self, identifier: str) -> Optional[OtpInfo]:
        """Return timestamps and expiry state for ``identifier`` without the code."""
        identifier = normalize_identifier(identifier)
        entry = self.store.get(identifier) if identifier else None
        if entry is None:
            return None
        return OtpInfo(
            created_at=entry.created_at,
            expires_at=entry.expires_at,
            is_expired=entry.is_expired(self.clock()),
        )

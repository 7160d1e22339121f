"""
OTP Verifier
============
Single-use, time-bounded verification of submitted codes.
"""

import hmac
from datetime import datetime
from typing import Callable

import structlog

from .exceptions import CodeNotFoundError, ExpiredCodeError, MismatchError, ValidationError
from .models import VerifyReason, VerifyResult, normalize_identifier, utc_now
from .store import OTPStore

logger = structlog.get_logger(__name__)


class OTPVerifier:
    """
    Checks submitted codes against the store.

    Per identifier the entry is either absent, live, expired or consumed.
    Expired and consumed entries are deleted the moment they are seen, so
    both collapse back to absent. A wrong code leaves a live entry in place.
    """

    def __init__(self, store: OTPStore, clock: Callable[[], datetime] = utc_now):
        self.store = store
        self.clock = clock

    def consume(self, identifier: str, code: str) -> None:
        """
        Consume the live code for ``identifier`` or raise.

        Raises:
            CodeNotFoundError: No entry exists
            ExpiredCodeError: Entry expired (it is deleted)
            MismatchError: Code differs (entry kept for retry)
        """
        entry = self.store.get(identifier)
        if entry is None:
            raise CodeNotFoundError()

        if entry.is_expired(self.clock()):
            self.store.delete(identifier)
            raise ExpiredCodeError()

        # Constant-time comparison
        if not hmac.compare_digest(entry.code.encode(), code.encode()):
            raise MismatchError()

        self.store.delete(identifier)

    def verify(self, identifier: str, code: str) -> VerifyResult:
        """
        Verify a code.

        Args:
            identifier: Email address or phone number the code was issued to
            code: User-provided code

        Returns:
            VerifyResult with success flag, message and reason
        """
        identifier = normalize_identifier(identifier)
        code = str(code).strip() if code is not None else ""
        if not identifier or not code:
            raise ValidationError("Identifier and code are required")

        try:
            self.consume(identifier, code)
        except CodeNotFoundError as e:
            logger.info("OTP verification without live code")
            return VerifyResult(False, e.message, VerifyReason.NOT_FOUND)
        except ExpiredCodeError as e:
            logger.warning("OTP expired")
            return VerifyResult(False, e.message, VerifyReason.EXPIRED)
        except MismatchError as e:
            logger.warning("Invalid OTP attempt")
            return VerifyResult(False, e.message, VerifyReason.MISMATCH)

        logger.info("OTP verified successfully")
        return VerifyResult(True, "OTP verified successfully", VerifyReason.VERIFIED)

"""
OTP Exceptions
==============
Exception classes for OTP issuance and verification.
"""

from typing import List, Optional


class OTPError(Exception):
    """Base exception for the OTP subsystem."""

    status_code = 500

    def __init__(self, message: str, code: str = "otp_error"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(OTPError):
    """Raised when a required identifier or option is missing or invalid."""

    status_code = 400

    def __init__(self, message: str, code: str = "invalid_request"):
        super().__init__(message, code)


class ChannelDeliveryError(OTPError):
    """Raised when delivery failed on channels the policy requires."""

    def __init__(self, message: str, channels: Optional[List[str]] = None):
        self.channels = channels or []
        super().__init__(message, "delivery_failed")


class CodeNotFoundError(OTPError):
    """No live code exists for the identifier."""

    status_code = 400

    def __init__(self, message: str = "OTP not found or expired"):
        super().__init__(message, "not_found")


class ExpiredCodeError(OTPError):
    """The code existed but its validity window has passed."""

    status_code = 400

    def __init__(self, message: str = "OTP expired"):
        super().__init__(message, "expired")


class MismatchError(OTPError):
    """The submitted code does not match the live code."""

    status_code = 400

    def __init__(self, message: str = "Invalid OTP"):
        super().__init__(message, "mismatch")


class InternalError(OTPError):
    """Unexpected failure; never carries the code."""

    def __init__(self, message: str = "Internal error while processing the OTP"):
        super().__init__(message, "internal_error")

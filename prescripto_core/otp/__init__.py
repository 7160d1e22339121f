"""
OTP Issuance and Verification
=============================
One-time codes delivered by email and SMS, verified once within a time window.
"""

from .models import (
    OTPChannel,
    IssuanceMode,
    AggregationPolicy,
    VerifyReason,
    OtpEntry,
    OtpInfo,
    DeliveryOutcome,
    IssueResult,
    VerifyResult,
    normalize_identifier,
)
from .exceptions import (
    OTPError,
    ValidationError,
    ChannelDeliveryError,
    CodeNotFoundError,
    ExpiredCodeError,
    MismatchError,
    InternalError,
)
from .store import OTPStore, InMemoryOTPStore
from .generator import OTPGenerator, generate_code
from .verifier import OTPVerifier
from .issuer import OTPIssuer
from .service import OTPService, ServiceResponse

__all__ = [
    # Models
    "OTPChannel",
    "IssuanceMode",
    "AggregationPolicy",
    "VerifyReason",
    "OtpEntry",
    "OtpInfo",
    "DeliveryOutcome",
    "IssueResult",
    "VerifyResult",
    "normalize_identifier",
    # Exceptions
    "OTPError",
    "ValidationError",
    "ChannelDeliveryError",
    "CodeNotFoundError",
    "ExpiredCodeError",
    "MismatchError",
    "InternalError",
    # Store
    "OTPStore",
    "InMemoryOTPStore",
    # Generator
    "OTPGenerator",
    "generate_code",
    # Verifier / Issuer
    "OTPVerifier",
    "OTPIssuer",
    # Facade
    "OTPService",
    "ServiceResponse",
]

"""
Prescripto Core Library
=======================
OTP issuance and verification with email and SMS delivery.
"""

__version__ = "1.0.0"

# Configuration
from prescripto_core.config import OTPSettings

# Logging
from prescripto_core.log_setup import setup_logging

# Notifications
from prescripto_core.notifications import (
    EmailSender,
    SmsSender,
    NotificationResult,
    render_otp_email,
    render_otp_sms,
)

# OTP
from prescripto_core.otp import (
    OTPService,
    ServiceResponse,
    OTPIssuer,
    OTPVerifier,
    OTPGenerator,
    OTPStore,
    InMemoryOTPStore,
    IssuanceMode,
    AggregationPolicy,
    OTPChannel,
    OtpEntry,
    IssueResult,
    VerifyResult,
    DeliveryOutcome,
)

__all__ = [
    "__version__",
    "OTPSettings",
    "setup_logging",
    "EmailSender",
    "SmsSender",
    "NotificationResult",
    "render_otp_email",
    "render_otp_sms",
    "OTPService",
    "ServiceResponse",
    "OTPIssuer",
    "OTPVerifier",
    "OTPGenerator",
    "OTPStore",
    "InMemoryOTPStore",
    "IssuanceMode",
    "AggregationPolicy",
    "OTPChannel",
    "OtpEntry",
    "IssueResult",
    "VerifyResult",
    "DeliveryOutcome",
]

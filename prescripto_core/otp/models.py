"""
OTP Models
==========
Data models and enums for OTP issuance and verification.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional


class OTPChannel(str, Enum):
    """OTP delivery channels."""
    EMAIL = "email"
    SMS = "sms"


class IssuanceMode(str, Enum):
    """Which identifiers an issuance request delivers to."""
    SINGLE_CHANNEL = "single"
    DUAL_CHANNEL = "dual"


class AggregationPolicy(str, Enum):
    """How per-channel outcomes combine into the issuance result."""
    ALL_OR_NOTHING = "all_or_nothing"
    BEST_EFFORT = "best_effort"


class VerifyReason(str, Enum):
    VERIFIED = "verified"
    NOT_FOUND = "not_found"
    EXPIRED = "expired"
    MISMATCH = "mismatch"
    INVALID_REQUEST = "invalid_request"


@dataclass(frozen=True)
class OtpEntry:
    """One outstanding verification challenge for an identifier."""
    identifier: str
    code: str
    created_at: datetime
    expires_at: datetime

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at


@dataclass(frozen=True)
class OtpInfo:
    """Public view of an entry. Deliberately omits the code."""
    created_at: datetime
    expires_at: datetime
    is_expired: bool


@dataclass
class DeliveryOutcome:
    """Result of one notification attempt on one channel."""
    success: bool
    channel: OTPChannel
    recipient: str
    data: Optional[Any] = None
    error: Optional[Any] = None

    def to_dict(self) -> Dict[str, Any]:
        result = {"success": self.success, "channel": self.channel.value}
        if self.success:
            result["data"] = self.data
        else:
            result["error"] = self.error
        return result


@dataclass
class IssueResult:
    """Aggregate result of an issuance call."""
    message: str
    created_at: datetime
    code: Optional[str] = None
    outcomes: List[DeliveryOutcome] = field(default_factory=list)

    @property
    def failed_channels(self) -> List[str]:
        return [o.channel.value for o in self.outcomes if not o.success]

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {
            "message": self.message,
            "createdAt": self.created_at.isoformat(),
            "channels": [o.to_dict() for o in self.outcomes],
        }
        if self.code is not None:
            body["otp"] = self.code
        return body


@dataclass
class VerifyResult:
    """Result of a verification attempt."""
    success: bool
    message: str
    reason: VerifyReason

    def to_dict(self) -> Dict[str, Any]:
        return {"success": self.success, "message": self.message}


def utc_now() -> datetime:
    """Default clock for OTP timestamps."""
    return datetime.now(timezone.utc)


def normalize_identifier(value: Optional[str]) -> Optional[str]:
    """
    Canonical store key for an email address or phone number.

    Issuance and verification both key the store through this, so the same
    raw input always reaches the same entry. Blank input becomes ``None``.
    """
    if value is None:
        return None
    return str(value).strip() or None

"""
OTP Service
===========
Caller-facing boundary for OTP issuance and verification.

Every call returns a ``ServiceResponse`` with an HTTP-equivalent status
code; exceptions from the issuer and verifier stop here.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import structlog

from prescripto_core.config import OTPSettings
from prescripto_core.notifications import EmailSender, SmsSender

from .exceptions import ChannelDeliveryError, InternalError, ValidationError
from .generator import OTPGenerator
from .issuer import OTPIssuer
from .models import AggregationPolicy, IssuanceMode
from .store import InMemoryOTPStore, OTPStore
from .verifier import OTPVerifier

logger = structlog.get_logger(__name__)


@dataclass
class ServiceResponse:
    status_code: int
    body: Dict[str, Any] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


class OTPService:
    """Issues and verifies OTPs, translating failures into responses."""

    def __init__(self, issuer: OTPIssuer, verifier: OTPVerifier):
        self.issuer = issuer
        self.verifier = verifier

    @classmethod
    def from_settings(
        cls,
        settings: Optional[OTPSettings] = None,
        store: Optional[OTPStore] = None,
        email_sender: Optional[EmailSender] = None,
        sms_sender: Optional[SmsSender] = None,
    ) -> "OTPService":
        """
        Wire the default components.

        Args:
            settings: OTP settings (defaults to the environment)
            store: OTP store (defaults to a fresh in-memory store)
            email_sender: Email sender (defaults to SMTP from settings)
            sms_sender: SMS sender (defaults to LabsMobile from settings)

        Returns:
            Ready-to-use OTPService
        """
        settings = settings or OTPSettings.from_env()
        store = store if store is not None else InMemoryOTPStore()
        email_sender = email_sender or EmailSender(
            user=settings.smtp_user,
            password=settings.smtp_password,
            host=settings.smtp_host,
            port=settings.smtp_port,
        )
        sms_sender = sms_sender or SmsSender(
            username=settings.sms_username,
            token=settings.sms_token,
            sender_id=settings.sms_sender_id,
            api_url=settings.sms_api_url,
            default_country=settings.sms_default_country,
        )

        generator = OTPGenerator(store, settings)
        issuer = OTPIssuer(
            generator,
            email_sender=email_sender,
            sms_sender=sms_sender,
            mode=IssuanceMode(settings.issuance_mode),
            policy=AggregationPolicy(settings.aggregation_policy),
            expose_code=settings.expose_code,
            send_timeout=settings.send_timeout_seconds,
        )
        return cls(issuer, OTPVerifier(store, clock=generator.clock))

    async def close(self) -> None:
        """Release sender resources such as the SMS HTTP client."""
        for sender in (self.issuer.email_sender, self.issuer.sms_sender):
            close = getattr(sender, "close", None)
            if close is not None:
                await close()
        logger.info("OTP service closed")

    async def __aenter__(self) -> "OTPService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()

    async def issue_otp(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        mode: Optional[IssuanceMode] = None,
    ) -> ServiceResponse:
        """Issue an OTP; 200 on success, 400 on missing identifier, 500 otherwise."""
        try:
            result = await self.issuer.issue(email=email, phone=phone, mode=mode)
        except ValidationError as e:
            return ServiceResponse(400, {"message": e.message})
        except ChannelDeliveryError as e:
            logger.error("OTP issuance failed", failed_channels=e.channels)
            return ServiceResponse(500, {"message": e.message, "channels": e.channels})
        except Exception:
            logger.exception("Unexpected error issuing OTP")
            return ServiceResponse(500, {"message": InternalError().message})

        return ServiceResponse(200, result.to_dict())

    async def verify_otp(self, identifier: Optional[str], code: Optional[str]) -> ServiceResponse:
        """Verify an OTP; 200 on success, 400 on invalid or expired, 500 otherwise."""
        try:
            result = self.verifier.verify(identifier, code)
        except ValidationError as e:
            return ServiceResponse(400, {"success": False, "message": e.message})
        except Exception:
            logger.exception("Unexpected error verifying OTP")
            return ServiceResponse(500, {"success": False, "message": InternalError().message})

        return ServiceResponse(200 if result.success else 400, result.to_dict())

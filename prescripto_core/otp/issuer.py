"""
OTP Issuer
==========
Generates one code per request and delivers it concurrently on every
available channel.
"""

import asyncio
from typing import Awaitable, List, Optional, Tuple

import structlog

from prescripto_core.messaging import (
    mask_email,
    mask_phone,
    normalize_phone,
    validate_e164,
    validate_email,
)
from prescripto_core.notifications import (
    OTP_EMAIL_SUBJECT,
    EmailSender,
    NotificationResult,
    SmsSender,
    render_otp_email,
    render_otp_sms,
)

from .exceptions import ChannelDeliveryError, ValidationError
from .generator import OTPGenerator
from .models import (
    AggregationPolicy,
    DeliveryOutcome,
    IssuanceMode,
    IssueResult,
    OTPChannel,
    normalize_identifier,
)

logger = structlog.get_logger(__name__)

SUCCESS_MESSAGES = {
    IssuanceMode.SINGLE_CHANNEL: "OTP sent to the email address.",
    IssuanceMode.DUAL_CHANNEL: "OTP sent through the available channels.",
}


class OTPIssuer:
    """
    Issuance orchestrator.

    The code is generated and stored before any send starts, so a code
    delivered quickly is already verifiable. Sends run concurrently and
    each is bounded by ``send_timeout``.
    """

    def __init__(
        self,
        generator: OTPGenerator,
        email_sender: Optional[EmailSender] = None,
        sms_sender: Optional[SmsSender] = None,
        mode: IssuanceMode = IssuanceMode.DUAL_CHANNEL,
        policy: AggregationPolicy = AggregationPolicy.ALL_OR_NOTHING,
        expose_code: bool = True,
        send_timeout: float = 15.0,
        email_subject: str = OTP_EMAIL_SUBJECT,
    ):
        self.generator = generator
        self.email_sender = email_sender
        self.sms_sender = sms_sender
        self.mode = IssuanceMode(mode)
        self.policy = AggregationPolicy(policy)
        self.expose_code = expose_code
        self.send_timeout = send_timeout
        self.email_subject = email_subject

    def _channels(
        self,
        email: Optional[str],
        phone: Optional[str],
        mode: IssuanceMode,
    ) -> List[Tuple[OTPChannel, str]]:
        if mode == IssuanceMode.SINGLE_CHANNEL:
            if not email:
                raise ValidationError("Email is required")
            phone = None
        elif not email and not phone:
            raise ValidationError("At least an email or a phone number is required")

        # Malformed input is rejected before any code is stored
        if email and not validate_email(email):
            raise ValidationError("Invalid email address")
        if phone and not validate_e164(normalize_phone(phone)):
            raise ValidationError("Invalid phone number")

        channels = []
        if email:
            channels.append((OTPChannel.EMAIL, email))
        if phone:
            channels.append((OTPChannel.SMS, phone))
        return channels

    def _send(self, channel: OTPChannel, recipient: str, code: str) -> Optional[Awaitable[NotificationResult]]:
        if channel == OTPChannel.EMAIL:
            if self.email_sender is None:
                return None
            return self.email_sender.send_email(recipient, self.email_subject, render_otp_email(code))
        if self.sms_sender is None:
            return None
        return self.sms_sender.send_sms(recipient, render_otp_sms(code))

    async def _dispatch(self, channel: OTPChannel, recipient: str, code: str) -> DeliveryOutcome:
        """Run one channel send and fold every failure into a DeliveryOutcome."""
        masked = mask_email(recipient) if channel == OTPChannel.EMAIL else mask_phone(recipient)
        send = self._send(channel, recipient, code)
        if send is None:
            logger.error("OTP channel not configured", channel=channel.value)
            return DeliveryOutcome(False, channel, recipient, error=f"{channel.value} channel is not configured")

        try:
            result = await asyncio.wait_for(send, timeout=self.send_timeout)
        except asyncio.TimeoutError:
            logger.error("OTP delivery timed out", channel=channel.value, recipient=masked, timeout=self.send_timeout)
            return DeliveryOutcome(False, channel, recipient, error="delivery timed out")
        except Exception as e:
            logger.exception("OTP sender raised", channel=channel.value, recipient=masked)
            return DeliveryOutcome(False, channel, recipient, error=str(e) or type(e).__name__)

        if not result.success:
            logger.warning("OTP delivery failed", channel=channel.value, recipient=masked, error=result.error)
            return DeliveryOutcome(False, channel, recipient, error=result.error or result.message)

        logger.info("OTP delivered", channel=channel.value, recipient=masked)
        return DeliveryOutcome(True, channel, recipient, data=result.data)

    def _aggregate(self, outcomes: List[DeliveryOutcome]) -> None:
        failed = [o.channel.value for o in outcomes if not o.success]
        if not failed:
            return
        if self.policy == AggregationPolicy.BEST_EFFORT and len(failed) < len(outcomes):
            logger.warning("OTP partially delivered", failed_channels=failed)
            return
        raise ChannelDeliveryError(
            f"OTP delivery failed on: {', '.join(failed)}",
            channels=failed,
        )

    async def issue(
        self,
        email: Optional[str] = None,
        phone: Optional[str] = None,
        mode: Optional[IssuanceMode] = None,
    ) -> IssueResult:
        """
        Issue one code and deliver it.

        Args:
            email: Recipient email address
            phone: Recipient phone number (ignored in single-channel mode)
            mode: Per-call override of the configured issuance mode

        Returns:
            IssueResult with per-channel outcomes

        Raises:
            ValidationError: No deliverable identifier, or a malformed email or phone
            ChannelDeliveryError: Delivery failed as judged by the policy
        """
        mode = self.mode if mode is None else IssuanceMode(mode)
        email = normalize_identifier(email)
        phone = normalize_identifier(phone)
        channels = self._channels(email, phone, mode)

        # Stored under the primary identifier; email wins when both are given
        entry = self.generator.create_entry(channels[0][1])
        code = entry.code

        outcomes = await asyncio.gather(
            *(self._dispatch(channel, recipient, code) for channel, recipient in channels)
        )
        outcomes = list(outcomes)
        self._aggregate(outcomes)

        return IssueResult(
            message=SUCCESS_MESSAGES[mode],
            created_at=entry.created_at,
            code=code if self.expose_code else None,
            outcomes=outcomes,
        )

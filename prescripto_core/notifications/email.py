"""
SMTP Email Sender
=================
Sends HTML email over SMTP (Gmail by default) without blocking the event loop.
"""

import asyncio
import smtplib
from email.message import EmailMessage
from email.utils import make_msgid
from typing import Optional

import structlog

from prescripto_core.messaging import mask_email

from .base import BaseNotificationSender, NotificationResult
from .templates import SAMPLE_CODE, render_otp_email

logger = structlog.get_logger(__name__)


class EmailSender(BaseNotificationSender):
    """
    SMTP email sender.

    ``send_email`` never raises: connection, auth and delivery errors come
    back as a failed ``NotificationResult``.
    """

    name = "smtp"

    def __init__(
        self,
        user: str,
        password: str,
        host: str = "smtp.gmail.com",
        port: int = 465,
        from_email: Optional[str] = None,
        timeout: float = 30.0,
    ):
        super().__init__()
        self.user = user
        self.password = password
        self.host = host
        self.port = int(port)
        self.from_email = from_email or user
        self.timeout = timeout

    def build_message(self, to: str, subject: str, html_content: str) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = subject
        msg["From"] = self.from_email
        msg["To"] = to
        msg["Message-ID"] = make_msgid(domain=self.from_email.partition("@")[2] or None)
        msg.set_content("Open this message in an HTML capable client.")
        msg.add_alternative(html_content, subtype="html")
        return msg

    def _deliver(self, msg: EmailMessage) -> dict:
        """Blocking SMTP delivery; returns the refused-recipients dict."""
        with smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout) as server:
            if self.user and self.password:
                server.login(self.user, self.password)
            return server.send_message(msg)

    async def send_email(
        self,
        to: str,
        subject: str,
        html_content: Optional[str] = None,
    ) -> NotificationResult:
        """
        Send an HTML email.

        Args:
            to: Recipient address
            subject: Subject line
            html_content: HTML body; the OTP template with a sample code
                is used when omitted

        Returns:
            NotificationResult with the SMTP response or error
        """
        logger.info("Sending email", recipient=mask_email(to), subject=subject)

        if not html_content:
            html_content = render_otp_email(SAMPLE_CODE)

        loop = asyncio.get_event_loop()

        try:
            # Headers containing CR or LF raise ValueError
            msg = self.build_message(to, subject, html_content)
            # Run in executor to avoid blocking the event loop
            refused = await loop.run_in_executor(None, self._deliver, msg)
        except (smtplib.SMTPException, OSError, ValueError) as e:
            logger.error("Email send failed", recipient=mask_email(to), error=str(e))
            return NotificationResult(
                success=False,
                error=str(e) or "Email sending failed",
                message="Could not send the email; the service keeps running",
            )

        if refused:
            logger.error("Email recipient refused", recipient=mask_email(to))
            return NotificationResult(
                success=False,
                error={addr: list(reason) for addr, reason in refused.items()},
                message="Could not send the email; the service keeps running",
            )

        data = {"accepted": [to], "message_id": msg.get("Message-ID")}
        logger.info("Email sent", recipient=mask_email(to))
        return NotificationResult(success=True, data=data)

"""
Notification Senders
====================
Email and SMS delivery with structured, non-raising results.
"""

from .base import BaseNotificationSender, NotificationResult
from .email import EmailSender
from .sms import SmsSender
from .templates import OTP_EMAIL_SUBJECT, render_otp_email, render_otp_sms

__all__ = [
    "BaseNotificationSender",
    "NotificationResult",
    "EmailSender",
    "SmsSender",
    "OTP_EMAIL_SUBJECT",
    "render_otp_email",
    "render_otp_sms",
]

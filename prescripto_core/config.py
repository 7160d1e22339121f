"""
OTP Configuration
=================
Environment-driven settings for OTP issuance and notification delivery.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


LABSMOBILE_SEND_URL = "https://api.labsmobile.com/json/send"


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    """Parse an integer variable, falling back to the default on junk or zero."""
    raw = env.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        return default
    return value or default


def _env_float(env: Mapping[str, str], name: str, default: float) -> float:
    raw = env.get(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


@dataclass
class OTPSettings:
    """Process-wide OTP and notification settings."""
    digits: int = 6
    expiry_minutes: int = 10
    issuance_mode: str = "dual"
    aggregation_policy: str = "all_or_nothing"
    expose_code: bool = True
    send_timeout_seconds: float = 15.0

    # LabsMobile bulk SMS
    sms_username: str = ""
    sms_token: str = ""
    sms_sender_id: str = "Sender"
    sms_api_url: str = LABSMOBILE_SEND_URL
    sms_default_country: str = "34"

    # SMTP (Gmail by default)
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 465

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "OTPSettings":
        """
        Build settings from environment variables.

        Args:
            env: Mapping to read from (defaults to os.environ)

        Returns:
            OTPSettings populated from the environment
        """
        env = os.environ if env is None else env
        return cls(
            digits=_env_int(env, "OTP_DIGITS", 6),
            expiry_minutes=_env_int(env, "OTP_EXPIRY_MINUTES", 10),
            issuance_mode=env.get("OTP_ISSUANCE_MODE", "dual").strip().lower(),
            aggregation_policy=env.get(
                "OTP_AGGREGATION_POLICY", "all_or_nothing"
            ).strip().lower(),
            expose_code=_env_bool(env, "OTP_EXPOSE_CODE", True),
            send_timeout_seconds=_env_float(env, "OTP_SEND_TIMEOUT_SECONDS", 15.0),
            sms_username=env.get("SMS_USERNAME", ""),
            sms_token=env.get("SMS_TOKEN", ""),
            sms_sender_id=env.get("SMS_SENDER_ID", "Sender"),
            sms_api_url=env.get("SMS_API_URL", LABSMOBILE_SEND_URL),
            sms_default_country=env.get("SMS_DEFAULT_COUNTRY", "34").strip().lstrip("+"),
            smtp_user=env.get("GMAIL_USER", ""),
            smtp_password=env.get("GMAIL_PASSWORD", ""),
            smtp_host=env.get("SMTP_HOST", "smtp.gmail.com"),
            smtp_port=_env_int(env, "SMTP_PORT", 465),
        )

"""
Tests for settings, messaging helpers and logging setup.
"""

import json
import logging

import structlog

from prescripto_core.config import LABSMOBILE_SEND_URL, OTPSettings
from prescripto_core.log_setup import JSONFormatter, setup_logging
from prescripto_core.messaging import (
    mask_email,
    mask_phone,
    normalize_phone,
    to_msisdn,
    validate_e164,
    validate_email,
)


class TestOTPSettings:

    def test_defaults(self):
        settings = OTPSettings.from_env({})

        assert settings.digits == 6
        assert settings.expiry_minutes == 10
        assert settings.issuance_mode == "dual"
        assert settings.aggregation_policy == "all_or_nothing"
        assert settings.expose_code is True
        assert settings.sms_api_url == LABSMOBILE_SEND_URL
        assert settings.smtp_port == 465
        assert settings.sms_default_country == "34"

    def test_reads_environment(self):
        settings = OTPSettings.from_env({
            "OTP_DIGITS": "8",
            "OTP_EXPIRY_MINUTES": "3",
            "OTP_ISSUANCE_MODE": "Single",
            "OTP_AGGREGATION_POLICY": "best_effort",
            "OTP_EXPOSE_CODE": "false",
            "OTP_SEND_TIMEOUT_SECONDS": "2.5",
            "SMS_USERNAME": "clinic",
            "SMS_TOKEN": "tok",
            "GMAIL_USER": "prescripto@gmail.com",
            "GMAIL_PASSWORD": "pw",
            "SMS_DEFAULT_COUNTRY": "+52",
        })

        assert settings.digits == 8
        assert settings.expiry_minutes == 3
        assert settings.issuance_mode == "single"
        assert settings.aggregation_policy == "best_effort"
        assert settings.expose_code is False
        assert settings.send_timeout_seconds == 2.5
        assert settings.sms_username == "clinic"
        assert settings.smtp_user == "prescripto@gmail.com"
        assert settings.sms_default_country == "52"

    def test_invalid_numbers_fall_back(self):
        settings = OTPSettings.from_env({"OTP_DIGITS": "six", "OTP_EXPIRY_MINUTES": "0"})

        assert settings.digits == 6
        assert settings.expiry_minutes == 10


class TestMessagingHelpers:

    def test_normalize_phone(self):
        assert normalize_phone("+34 600-111-222") == "+34600111222"
        assert normalize_phone("600111222") == "+34600111222"
        assert normalize_phone("0034600111222") == "+34600111222"
        assert to_msisdn("600 111 222") == "34600111222"

    def test_validate(self):
        assert validate_e164("+34600111222") is True
        assert validate_e164("600111222") is False
        assert validate_email("maria@example.com") is True
        assert validate_email("maria@") is False

    def test_masking(self):
        assert mask_phone("+34600111222") == "********222"
        assert mask_email("maria.lopez@example.com") == "m***@example.com"
        assert mask_email("") == "***"


class TestLogging:

    def test_json_formatter(self):
        record = logging.LogRecord("prescripto", logging.INFO, __file__, 1, "OTP delivered", None, None)
        record.extra_data = {"channel": "sms"}

        data = json.loads(JSONFormatter().format(record))

        assert data["message"] == "OTP delivered"
        assert data["channel"] == "sms"
        assert data["level"] == "INFO"
        assert "request_id" not in data

    def test_setup_routes_structlog_through_stdlib(self, capsys):
        setup_logging("prescripto-test", level="INFO")
        try:
            structlog.get_logger("prescripto.test").info("OTP generated", digits=6)

            lines = [json.loads(line) for line in capsys.readouterr().out.splitlines() if line]
            event = lines[-1]
            assert event["message"] == "OTP generated"
            assert event["digits"] == 6
            assert event["service"] == "prescripto-test"
        finally:
            structlog.reset_defaults()
            logging.getLogger().handlers.clear()

"""
Shared fixtures: a controllable clock and fake notification senders.
"""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from prescripto_core.notifications import NotificationResult
from prescripto_core.otp import InMemoryOTPStore, OTPGenerator, OTPVerifier


class FakeClock:
    def __init__(self, start=None):
        self.now = start or datetime(2025, 3, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self):
        return self.now

    def advance(self, **kwargs):
        self.now += timedelta(**kwargs)


class FakeEmailSender:
    def __init__(self, success=True, delay=0.0, error="smtp down"):
        self.success = success
        self.delay = delay
        self.error = error
        self.calls = []

    async def send_email(self, to, subject, html_content=None):
        self.calls.append((to, subject, html_content))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.success:
            return NotificationResult(success=True, data={"accepted": [to]})
        return NotificationResult(success=False, error=self.error, message="email failed")


class FakeSmsSender:
    def __init__(self, success=True, delay=0.0, error="provider rejected"):
        self.success = success
        self.delay = delay
        self.error = error
        self.calls = []

    async def send_sms(self, phone_number, message):
        self.calls.append((phone_number, message))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.success:
            return NotificationResult(success=True, data={"code": "0", "subid": "abc"})
        return NotificationResult(success=False, error=self.error, message="sms failed")


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def store():
    return InMemoryOTPStore()


@pytest.fixture
def generator(store, clock):
    return OTPGenerator(store, clock=clock)


@pytest.fixture
def verifier(store, clock):
    return OTPVerifier(store, clock=clock)

"""
LabsMobile SMS Sender
=====================
Sends SMS through the LabsMobile bulk-SMS JSON API.
"""

import logging
from base64 import b64encode
from typing import Optional

import httpx
import structlog
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential, before_sleep_log

from prescripto_core.config import LABSMOBILE_SEND_URL
from prescripto_core.messaging import mask_phone, to_msisdn

from .base import BaseNotificationSender, NotificationResult

logger = structlog.get_logger(__name__)
retry_logger = logging.getLogger(__name__)


class SmsSender(BaseNotificationSender):
    """
    LabsMobile SMS sender.

    ``send_sms`` never raises: transport and provider errors come back as
    a failed ``NotificationResult``.
    """

    name = "labsmobile"

    def __init__(
        self,
        username: str,
        token: str,
        sender_id: str = "Sender",
        api_url: str = LABSMOBILE_SEND_URL,
        timeout: float = 30.0,
        client: Optional[httpx.AsyncClient] = None,
        default_country: str = "34",
    ):
        """
        Args:
            username: LabsMobile account user
            token: LabsMobile API token
            sender_id: Alphanumeric sender shown to the recipient (``tpoa``)
            api_url: JSON send endpoint
            timeout: HTTP timeout in seconds
            client: Pre-built client, mainly for tests
            default_country: Country code prefixed to 9-digit national
                numbers; empty sends the digits unchanged
        """
        super().__init__()
        self.username = username
        self.token = token
        self.sender_id = sender_id
        self.api_url = api_url
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None
        self.default_country = default_country

    def _auth_header(self) -> str:
        credentials = b64encode(f"{self.username}:{self.token}".encode()).decode()
        return f"Basic {credentials}"

    async def initialize(self) -> None:
        """Create HTTP client with auth."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
            self._owns_client = True
        await super().initialize()

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
        await super().close()

    @retry(
        retry=retry_if_exception_type(httpx.TransportError),
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=0.5, min=0.5, max=4),
        before_sleep=before_sleep_log(retry_logger, logging.WARNING),
        reraise=True,
    )
    async def _post(self, payload: dict) -> httpx.Response:
        """POST to the provider, retrying connection-level failures."""
        return await self._client.post(
            self.api_url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": self._auth_header(),
            },
        )

    async def send_sms(self, phone_number: str, message: str) -> NotificationResult:
        """
        Send an SMS message.

        Args:
            phone_number: Recipient phone number
            message: Message text

        Returns:
            NotificationResult with the provider response or error
        """
        logger.info("Sending SMS", recipient=mask_phone(phone_number))

        if self._client is None:
            await self.initialize()

        payload = {
            "message": message,
            "tpoa": self.sender_id,
            "recipient": [{"msisdn": to_msisdn(phone_number, self.default_country)}],
        }

        try:
            response = await self._post(payload)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                "SMS send failed",
                recipient=mask_phone(phone_number),
                status_code=e.response.status_code,
            )
            return NotificationResult(
                success=False,
                error=_response_body(e.response),
                message="Could not send the SMS; the service keeps running",
            )
        except (httpx.HTTPError, ValueError) as e:
            logger.error("SMS send failed", recipient=mask_phone(phone_number), error=str(e))
            return NotificationResult(
                success=False,
                error="SMS sending failed",
                message="Could not send the SMS; the service keeps running",
            )

        logger.info("SMS sent", recipient=mask_phone(phone_number), response=data)
        return NotificationResult(success=True, data=data)


def _response_body(response: httpx.Response):
    try:
        return response.json()
    except ValueError:
        return response.text or "SMS sending failed"

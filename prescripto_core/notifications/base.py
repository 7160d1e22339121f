"""
Notification Sender Base
========================
Shared result type and base class for email and SMS senders.
"""

from abc import ABC
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional
import structlog

logger = structlog.get_logger(__name__)


@dataclass
class NotificationResult:
    """Result of a send operation. Senders return this instead of raising."""
    success: bool
    data: Optional[Any] = None
    error: Optional[Any] = None
    message: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


class BaseNotificationSender(ABC):
    """
    Base class for notification channels.

    Subclasses that hold network resources open them in ``initialize``
    and release them in ``close``.
    """

    name: str = "base"

    def __init__(self):
        self._is_initialized = False

    async def initialize(self) -> None:
        self._is_initialized = True
        logger.info("Notification sender initialized", sender=self.name)

    async def close(self) -> None:
        self._is_initialized = False
        logger.info("Notification sender closed", sender=self.name)

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

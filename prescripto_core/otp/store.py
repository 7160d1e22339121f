"""
OTP Store
=========
Keyed storage of live OTP entries.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from .models import OtpEntry


class OTPStore(ABC):
    """
    Storage abstraction for OTP entries, one per identifier.

    Operations are synchronous so each one is atomic relative to other
    tasks on the event loop.
    """

    @abstractmethod
    def put(self, identifier: str, entry: OtpEntry) -> None:
        """Store ``entry``, replacing any existing entry for ``identifier``."""

    @abstractmethod
    def get(self, identifier: str) -> Optional[OtpEntry]:
        """Return the entry for ``identifier`` or None."""

    @abstractmethod
    def delete(self, identifier: str) -> None:
        """Remove the entry for ``identifier``; missing keys are ignored."""


class InMemoryOTPStore(OTPStore):
    """
    Process-local OTP store.

    Entries live until consumed or found expired; nothing is swept and a
    restart drops every outstanding code. Single-instance deployments only,
    multiple workers need a shared store.
    """

    def __init__(self):
        self._entries: Dict[str, OtpEntry] = {}

    def put(self, identifier: str, entry: OtpEntry) -> None:
        self._entries[identifier] = entry

    def get(self, identifier: str) -> Optional[OtpEntry]:
        return self._entries.get(identifier)

    def delete(self, identifier: str) -> None:
        self._entries.pop(identifier, None)

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, identifier: str) -> bool:
        return identifier in self._entries

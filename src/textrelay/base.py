"""Receiver and broker interfaces.

This is the (small) contract that every input and output transport follows.
The relay itself only ever talks to these two interfaces.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Iterator


# Transport agnostic exceptions

class RelayError(Exception):
    """Base class for all relay errors."""


class ConfigurationError(RelayError, ValueError):
    """A descriptor or setting cannot be used as given."""


class DecodeError(RelayError, ValueError):
    """Inbound data was not valid UTF-8 text."""


class ProtocolViolation(RelayError):
    """A peer sent something it was never supposed to send."""


class Receiver(ABC):
    """Source of the single relayed message stream."""

    @classmethod
    @abstractmethod
    def matches(cls, descriptor: str) -> bool:
        """Whether this variant handles the source *descriptor*."""

    @abstractmethod
    def __iter__(self) -> Iterator[str]:
        """Yield messages in arrival order."""


class Broker(ABC):
    """Fan-out of messages to every attached destination of one kind."""

    @abstractmethod
    def matches(self, descriptor: str) -> bool:
        """Whether this broker handles the destination *descriptor*."""

    @abstractmethod
    def add_destination(self, descriptor: str) -> None:
        """Attach one more destination."""

    @abstractmethod
    def send(self, message: str) -> None:
        """Deliver *message* to all live destinations."""

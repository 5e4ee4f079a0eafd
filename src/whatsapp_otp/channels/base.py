"""Base delivery channel — abstract interface every WhatsApp sender implements."""

from abc import ABC, abstractmethod


class DeliveryChannel(ABC):
    """Abstract transport that carries OTP messages to a destination.

    The verification service only depends on these two capabilities; how a
    channel authenticates or talks to WhatsApp is its own business.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable channel name (used in logs and status)."""

    @abstractmethod
    def is_channel_ready(self) -> bool:
        """Return ``True`` once the channel is authenticated and usable."""

    @abstractmethod
    async def deliver(self, destination: str, text: str) -> None:
        """Transmit *text* to *destination*.

        Raises
        ------
        DeliveryError
            If the message could not be sent. The cause is carried as the
            exception message and ``__cause__``.
        """

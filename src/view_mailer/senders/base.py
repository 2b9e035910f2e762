"""Base mail sender interface."""

from abc import ABC, abstractmethod

from ..models import MailMessage


class MailSender(ABC):
    """Abstract base class for mail senders."""

    @abstractmethod
    def send(self, mail: MailMessage) -> None:
        """Send a mail message.

        Args:
            mail: Composed message to send

        Raises:
            DeliveryError: If the message cannot be handed off
        """
        pass

"""Mail sender implementations."""

from .base import MailSender
from .console import ConsoleMailSender
from .memory import MemoryMailSender
from ..exceptions import ConfigurationError

SENDERS = {
    "console": ConsoleMailSender,
    "memory": MemoryMailSender,
}


def create_sender(name: str) -> MailSender:
    """Create a mail sender by name.

    Args:
        name: Sender type (console or memory)

    Returns:
        Sender instance

    Raises:
        ConfigurationError: If the sender type is unknown
    """
    try:
        return SENDERS[name.lower()]()
    except KeyError:
        raise ConfigurationError(f"Unknown mail sender: {name}") from None


__all__ = ["MailSender", "ConsoleMailSender", "MemoryMailSender", "create_sender"]

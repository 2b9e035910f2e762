"""In-memory mail sender for tests and previews."""

import logging
from typing import List

from ..models import MailMessage
from .base import MailSender

logger = logging.getLogger(__name__)


class MemoryMailSender(MailSender):
    """Mail sender that keeps messages in an outbox instead of sending them."""

    def __init__(self):
        self.outbox: List[MailMessage] = []

    def send(self, mail: MailMessage) -> None:
        self.outbox.append(mail)
        logger.debug(f"Stored message '{mail.subject}' ({len(self.outbox)} in outbox)")

    def clear(self) -> None:
        self.outbox.clear()

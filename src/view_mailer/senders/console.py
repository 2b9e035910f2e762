"""Console mail sender."""

import sys
from typing import Optional, TextIO

from ..exceptions import DeliveryError
from ..models import MailMessage
from .base import MailSender


class ConsoleMailSender(MailSender):
    """Writes each message as MIME text to a stream."""

    separator = "-" * 79

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def send(self, mail: MailMessage) -> None:
        stream = self.stream or sys.stdout
        try:
            stream.write(mail.to_mime().as_string())
            stream.write(f"\n{self.separator}\n")
            stream.flush()
        except OSError as e:
            raise DeliveryError(f"Failed to write message: {e}") from e

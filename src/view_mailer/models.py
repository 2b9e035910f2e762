"""Data models for composed mail messages."""

import io
import mimetypes
from dataclasses import dataclass, field
from email import encoders
from email.header import Header
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formatdate, make_msgid
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

from .exceptions import ValidationError
from .validators import validate_addresses


@dataclass
class ContentType:
    """MIME content type of a message part."""

    media_type: str = "text/plain"
    charset: Optional[str] = None

    @property
    def subtype(self) -> str:
        return self.media_type.split("/", 1)[1]

    def __str__(self) -> str:
        if self.charset:
            return f"{self.media_type}; charset={self.charset}"
        return self.media_type


@dataclass
class AlternateView:
    """An alternative rendering of the message body."""

    content_type: ContentType
    content_stream: io.BytesIO = field(default_factory=io.BytesIO)

    @classmethod
    def from_string(
        cls, content: str, media_type: str = "text/plain", encoding: str = "utf-8"
    ) -> "AlternateView":
        """Build a view by encoding text content.

        Args:
            content: Rendered body text
            media_type: MIME media type of the body
            encoding: Character set used to encode the body

        Returns:
            AlternateView whose stream is positioned at the start

        Raises:
            UnicodeEncodeError: If the content cannot be encoded
            LookupError: If the encoding is unknown
        """
        stream = io.BytesIO(content.encode(encoding))
        return cls(content_type=ContentType(media_type, encoding), content_stream=stream)

    def get_content(self) -> str:
        """Decode the stream using the view's charset."""
        return self.content_stream.getvalue().decode(self.content_type.charset or "utf-8")


@dataclass
class Attachment:
    """A file attached to a message."""

    filename: str
    content: bytes
    media_type: str = "application/octet-stream"
    inline: bool = False
    content_id: Optional[str] = None

    def to_mime(self) -> MIMEBase:
        maintype, subtype = self.media_type.split("/", 1)
        part = MIMEBase(maintype, subtype)
        part.set_payload(self.content)
        encoders.encode_base64(part)
        disposition = "inline" if self.inline else "attachment"
        part.add_header("Content-Disposition", disposition, filename=self.filename)
        if self.content_id:
            part.add_header("Content-ID", f"<{self.content_id}>")
        return part


class AttachmentCollection:
    """Ordered collection of message attachments."""

    def __init__(self, inline: bool = False):
        self._items: List[Attachment] = []
        self._is_inline = inline
        self._inline: Optional["AttachmentCollection"] = None

    @property
    def inline(self) -> "AttachmentCollection":
        """Attachments embedded in the HTML body and referenced by content id."""
        if self._is_inline:
            return self
        if self._inline is None:
            self._inline = AttachmentCollection(inline=True)
        return self._inline

    def add(
        self, filename: str, content: Union[bytes, str], media_type: Optional[str] = None
    ) -> Attachment:
        """Add an attachment from in-memory content.

        Args:
            filename: Name shown to the recipient
            content: Attachment bytes (text is encoded as UTF-8)
            media_type: MIME type, guessed from the filename when omitted

        Returns:
            The created attachment
        """
        if isinstance(content, str):
            content = content.encode("utf-8")
        if media_type is None:
            media_type = mimetypes.guess_type(filename)[0] or "application/octet-stream"
        attachment = Attachment(
            filename=filename,
            content=content,
            media_type=media_type,
            inline=self._is_inline,
            content_id=filename if self._is_inline else None,
        )
        self._items.append(attachment)
        return attachment

    def add_file(self, path: Union[str, Path], media_type: Optional[str] = None) -> Attachment:
        """Add an attachment read from disk."""
        path = Path(path)
        return self.add(path.name, path.read_bytes(), media_type)

    def copy(self) -> "AttachmentCollection":
        """Copy the collection, inline attachments included."""
        copied = AttachmentCollection(inline=self._is_inline)
        copied._items = list(self._items)
        if self._inline is not None:
            copied._inline = self._inline.copy()
        return copied

    def all(self) -> List[Attachment]:
        """Regular attachments followed by inline ones."""
        inline = self._inline.all() if self._inline is not None else []
        return list(self._items) + inline

    def __iter__(self) -> Iterator[Attachment]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Attachment:
        return self._items[index]


@dataclass
class MailMessage:
    """An outgoing mail message assembled by a mailer."""

    from_address: Optional[str] = None
    to: List[str] = field(default_factory=list)
    cc: List[str] = field(default_factory=list)
    bcc: List[str] = field(default_factory=list)
    reply_to: List[str] = field(default_factory=list)
    subject: str = ""
    headers: Dict[str, str] = field(default_factory=dict)
    subject_encoding: str = "utf-8"
    body_encoding: str = "utf-8"
    alternate_views: List[AlternateView] = field(default_factory=list)
    attachments: AttachmentCollection = field(default_factory=AttachmentCollection)

    def all_recipients(self) -> List[str]:
        return list(self.to) + list(self.cc) + list(self.bcc)

    def validate(self) -> None:
        """Check the message can be handed to a mail sender.

        Raises:
            ValidationError: If the sender or recipients are missing or invalid
        """
        if not self.from_address:
            raise ValidationError("A sender address is required")
        if not self.all_recipients():
            raise ValidationError("At least one recipient is required")
        if not self.alternate_views:
            raise ValidationError("The message has no body")

        validate_addresses([self.from_address], "from")
        validate_addresses(self.to, "to")
        validate_addresses(self.cc, "cc")
        validate_addresses(self.bcc, "bcc")
        validate_addresses(self.reply_to, "reply_to")

    def _build_body(self) -> MIMEBase:
        parts = [
            MIMEText(view.get_content(), view.content_type.subtype, view.content_type.charset)
            for view in self.alternate_views
        ]
        if len(parts) == 1:
            return parts[0]

        body = MIMEMultipart("alternative")
        for part in parts:
            body.attach(part)
        return body

    def to_mime(self) -> MIMEBase:
        """Create a MIME message.

        Returns:
            A stdlib email message ready to be serialized
        """
        if not self.alternate_views:
            raise ValidationError("The message has no body")

        mime_message = self._build_body()

        inline = self.attachments.inline.all()
        if inline:
            related = MIMEMultipart("related")
            related.attach(mime_message)
            for attachment in inline:
                related.attach(attachment.to_mime())
            mime_message = related

        if len(self.attachments):
            mixed = MIMEMultipart("mixed")
            mixed.attach(mime_message)
            for attachment in self.attachments:
                mixed.attach(attachment.to_mime())
            mime_message = mixed

        if self.from_address:
            mime_message["From"] = self.from_address
        if self.to:
            mime_message["To"] = ", ".join(self.to)
        if self.cc:
            mime_message["Cc"] = ", ".join(self.cc)
        if self.reply_to:
            mime_message["Reply-To"] = ", ".join(self.reply_to)
        if self.subject.isascii():
            mime_message["Subject"] = self.subject
        else:
            mime_message["Subject"] = Header(self.subject, self.subject_encoding)
        mime_message["Date"] = formatdate(localtime=True)
        mime_message["Message-ID"] = make_msgid()

        for name, value in self.headers.items():
            mime_message[name] = value

        return mime_message

"""The mail action result: renders views into a message and delivers it."""

import io
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Dict, List, Optional, Tuple

from .exceptions import ViewNotFoundError
from .logging import log_event
from .models import AlternateView, MailMessage
from .routing import ControllerContext
from .senders import MailSender
from .view_data import ViewBag, ViewDataDictionary
from .view_engines import ViewContext, ViewEngineCollection, ViewEngineResult, engines

if TYPE_CHECKING:
    from .mailer import MailerBase

logger = logging.getLogger(__name__)

# Format suffix and media type of each alternate view, in message order.
VIEW_FORMATS: Tuple[Tuple[str, str], ...] = (
    ("txt", "text/plain"),
    ("html", "text/html"),
)


@dataclass
class MailSendingContext:
    """Passed to ``on_mail_sending``; set ``cancel`` to stop delivery."""

    mail: MailMessage
    cancel: bool = False


class EmailResult:
    """A composed email, ready to be delivered."""

    def __init__(
        self,
        interceptor: "MailerBase",
        mail_sender: MailSender,
        mail: MailMessage,
        view_name: str,
        master_name: Optional[str] = None,
        message_encoding: str = "utf-8",
        trim_body: bool = True,
        view_data: Optional[ViewDataDictionary] = None,
        view_engines: Optional[ViewEngineCollection] = None,
    ):
        self.interceptor = interceptor
        self.mail_sender = mail_sender
        self.mail = mail
        self.view_name = view_name
        self.master_name = master_name
        self.message_encoding = message_encoding
        self.trim_body = trim_body
        self.view_data = view_data if view_data is not None else ViewDataDictionary()
        self.view_engines = view_engines if view_engines is not None else engines

    @property
    def view_bag(self) -> ViewBag:
        return ViewBag(self.view_data)

    def _render(self, controller_context: ControllerContext, result: ViewEngineResult) -> str:
        writer = io.StringIO()
        view_context = ViewContext(
            controller_context=controller_context,
            view=result.view,
            view_data=self.view_data,
            writer=writer,
        )
        try:
            result.view.render(view_context, writer)
        finally:
            result.view_engine.release_view(controller_context, result.view)

        body = writer.getvalue()
        return body.strip() if self.trim_body else body

    def execute(self, controller_context: ControllerContext) -> None:
        """Render every available format of the view into the message.

        Args:
            controller_context: Context of the mailer that created this result

        Raises:
            ViewNotFoundError: If neither a text nor an HTML view exists
            UnicodeEncodeError: If a body cannot be encoded with the message encoding
        """
        searched: List[str] = []
        rendered = 0

        for fmt, media_type in VIEW_FORMATS:
            result = self.view_engines.find_view(
                controller_context, f"{self.view_name}.{fmt}", self.master_name
            )
            if not result.found:
                searched.extend(result.searched_locations)
                continue

            body = self._render(controller_context, result)
            self.mail.alternate_views.append(
                AlternateView.from_string(body, media_type, self.message_encoding)
            )
            rendered += 1

        if not rendered:
            raise ViewNotFoundError(self.view_name, searched)

        self.mail.body_encoding = self.message_encoding
        log_event(
            logger,
            "composed",
            f"Rendered {rendered} view(s) for {self.view_name} as {self.message_encoding}",
            view_name=self.view_name,
        )

    def render_bodies(self) -> Dict[str, str]:
        """Get the rendered bodies keyed by media type."""
        return {
            view.content_type.media_type: view.get_content()
            for view in self.mail.alternate_views
        }

    def deliver(self) -> MailMessage:
        """Send the message through the mail sender.

        The interceptor sees the message before it is sent and may cancel
        delivery.

        Returns:
            The delivered (or cancelled) message

        Raises:
            ValidationError: If the message has no sender, recipients or body
        """
        self.mail.validate()

        context = MailSendingContext(mail=self.mail)
        self.interceptor.on_mail_sending(context)
        if context.cancel:
            log_event(
                logger,
                "cancelled",
                f"Delivery of {self.view_name} was cancelled",
                view_name=self.view_name,
            )
            return self.mail

        self.mail_sender.send(self.mail)
        recipients = len(self.mail.all_recipients())
        log_event(
            logger,
            "delivered",
            f"Delivered {self.view_name} to {recipients} recipient(s)",
            view_name=self.view_name,
            recipients=recipients,
        )
        self.interceptor.on_mail_sent(self.mail)
        return self.mail

    def __repr__(self) -> str:
        return f"EmailResult(view_name={self.view_name!r}, master_name={self.master_name!r})"

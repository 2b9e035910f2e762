"""Mailer base class: composes emails from views."""

import logging
from typing import Any, Dict, List, Optional

from .config import MailerSettings
from .exceptions import ArgumentMissingError
from .models import AttachmentCollection, MailMessage
from .result import EmailResult, MailSendingContext
from .routing import ControllerContext, build_route_data
from .senders import MailSender, create_sender
from .view_data import ViewBag, ViewDataDictionary
from .view_engines import JinjaViewEngine, ViewEngineCollection, engines

logger = logging.getLogger(__name__)


class MailerBase:
    """Base class for mailers.

    Subclasses expose one method per email, each setting the message fields
    and returning ``self.email(view_name, model)``::

        class WelcomeMailer(MailerBase):
            def signup(self, user):
                self.to.append(user.email)
                self.subject = "Welcome!"
                return self.email("signup", user)
    """

    #: Overrides the controller name derived from the class name.
    controller_name: Optional[str] = None
    #: Overrides the area derived from the module path.
    area: Optional[str] = None

    def __init__(
        self,
        mail_sender: Optional[MailSender] = None,
        settings: Optional[MailerSettings] = None,
        view_engines: Optional[ViewEngineCollection] = None,
    ):
        """Initialize the mailer.

        Args:
            mail_sender: Sender used by ``deliver``; built from settings when omitted
            settings: Mailer settings (defaults read from the environment)
            view_engines: Engines to resolve views with (defaults to the global registry)
        """
        self.settings = settings or MailerSettings()
        self.mail_sender = mail_sender or create_sender(self.settings.sender)
        self._view_engines = view_engines

        self.from_address: Optional[str] = None
        self.subject: str = ""
        self.to: List[str] = []
        self.cc: List[str] = []
        self.bcc: List[str] = []
        self.reply_to: List[str] = []
        self.headers: Dict[str, str] = {}
        self.attachments = AttachmentCollection()
        self.message_encoding: str = self.settings.message_encoding

        self.view_data = ViewDataDictionary()
        self._controller_context: Optional[ControllerContext] = None
        self._http_context: Any = None

    @property
    def view_bag(self) -> ViewBag:
        return ViewBag(self.view_data)

    @property
    def http_context(self) -> Any:
        return self._http_context

    @http_context.setter
    def http_context(self, value: Any) -> None:
        self._http_context = value
        if self._controller_context is not None:
            self._controller_context.http_context = value

    @property
    def controller_context(self) -> ControllerContext:
        if self._controller_context is None:
            self._controller_context = ControllerContext(
                mailer=self,
                route_data=build_route_data(self),
                http_context=self.http_context,
            )
        return self._controller_context

    @controller_context.setter
    def controller_context(self, value: ControllerContext) -> None:
        self._controller_context = value

    @property
    def view_engines(self) -> ViewEngineCollection:
        if self._view_engines is None:
            if not engines and self.settings.views_dir:
                self._view_engines = ViewEngineCollection(
                    [JinjaViewEngine(self.settings.views_dir)]
                )
            else:
                return engines
        return self._view_engines

    @view_engines.setter
    def view_engines(self, value: ViewEngineCollection) -> None:
        self._view_engines = value

    def on_mail_sending(self, context: MailSendingContext) -> None:
        """Called before a message is sent; set ``context.cancel`` to stop it."""
        pass

    def on_mail_sent(self, mail: MailMessage) -> None:
        """Called after a message has been sent."""
        pass

    def _build_mail(self) -> MailMessage:
        mail = MailMessage(
            from_address=self.from_address or self.settings.default_from,
            to=list(self.to),
            cc=list(self.cc),
            bcc=list(self.bcc),
            reply_to=list(self.reply_to),
            subject=self.subject,
            headers=dict(self.headers),
            subject_encoding=self.message_encoding,
            body_encoding=self.message_encoding,
            attachments=self.attachments.copy(),
        )
        return mail

    def email(
        self,
        view_name: str,
        model: Any = None,
        master_name: Optional[str] = None,
        trim_body: Optional[bool] = None,
    ) -> EmailResult:
        """Compose an email from a view.

        Renders ``<view_name>.txt`` and/or ``<view_name>.html`` into the body.

        Args:
            view_name: Name of the view to render
            model: Model passed to the view
            master_name: Optional layout for the view
            trim_body: Strip surrounding whitespace (defaults to settings)

        Returns:
            EmailResult holding the composed message

        Raises:
            ArgumentMissingError: If view_name is missing
            ViewNotFoundError: If no view format can be resolved
        """
        if not view_name:
            raise ArgumentMissingError("view_name")

        if trim_body is None:
            trim_body = self.settings.trim_body

        self.view_data.model = model
        result = EmailResult(
            interceptor=self,
            mail_sender=self.mail_sender,
            mail=self._build_mail(),
            view_name=view_name,
            master_name=master_name,
            message_encoding=self.message_encoding,
            trim_body=trim_body,
            view_data=self.view_data,
            view_engines=self.view_engines,
        )

        logger.debug(f"Composing {type(self).__name__}.{view_name}")
        result.execute(self.controller_context)
        return result

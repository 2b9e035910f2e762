"""Compose emails by rendering views, the way controller actions render pages."""

__version__ = "0.1.0"

from .exceptions import (
    MailerError,
    ArgumentMissingError,
    ViewNotFoundError,
    ValidationError,
    DeliveryError,
    ConfigurationError,
)
from .models import AlternateView, Attachment, AttachmentCollection, ContentType, MailMessage
from .view_data import ViewBag, ViewDataDictionary
from .routing import ControllerContext, RouteData
from .view_engines import (
    JinjaViewEngine,
    View,
    ViewContext,
    ViewEngine,
    ViewEngineCollection,
    ViewEngineResult,
    engines,
)
from .senders import ConsoleMailSender, MailSender, MemoryMailSender, create_sender
from .result import EmailResult, MailSendingContext
from .mailer import MailerBase
from .config import MailerSettings, load_settings
from .validators import validate_email_address

__all__ = [
    "MailerError",
    "ArgumentMissingError",
    "ViewNotFoundError",
    "ValidationError",
    "DeliveryError",
    "ConfigurationError",
    "AlternateView",
    "Attachment",
    "AttachmentCollection",
    "ContentType",
    "MailMessage",
    "ViewBag",
    "ViewDataDictionary",
    "ControllerContext",
    "RouteData",
    "JinjaViewEngine",
    "View",
    "ViewContext",
    "ViewEngine",
    "ViewEngineCollection",
    "ViewEngineResult",
    "engines",
    "ConsoleMailSender",
    "MailSender",
    "MemoryMailSender",
    "create_sender",
    "EmailResult",
    "MailSendingContext",
    "MailerBase",
    "MailerSettings",
    "load_settings",
    "validate_email_address",
]

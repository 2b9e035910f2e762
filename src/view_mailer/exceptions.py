"""Custom exceptions for view mailer."""

from typing import List, Optional


class MailerError(Exception):
    """Base exception for all view mailer errors."""

    pass


class ArgumentMissingError(MailerError, ValueError):
    """Raised when a required argument is missing."""

    def __init__(self, argument: str):
        super().__init__(f"Argument '{argument}' is required")
        self.argument = argument


class ViewNotFoundError(MailerError):
    """Raised when no registered view engine can resolve a view."""

    def __init__(self, view_name: str, searched_locations: Optional[List[str]] = None):
        self.view_name = view_name
        self.searched_locations = list(searched_locations or [])
        locations = "\n".join(f"  {location}" for location in self.searched_locations)
        message = (
            f"You must provide a view for this email. No view named '{view_name}' "
            f"(.txt or .html) was found."
        )
        if locations:
            message += f" The following locations were searched:\n{locations}"
        super().__init__(message)


class ValidationError(MailerError):
    """Raised when a mail message fails validation."""

    pass


class DeliveryError(MailerError):
    """Raised when a mail sender fails to deliver a message."""

    pass


class ConfigurationError(MailerError):
    """Raised when configuration is invalid or missing."""

    pass

"""Email address validation utilities."""

from typing import Iterable, Tuple
from email_validator import validate_email, EmailNotValidError

from .exceptions import ValidationError


def validate_email_address(email: str) -> Tuple[bool, str]:
    """Validate an email address.

    Args:
        email: Email address to validate

    Returns:
        Tuple of (is_valid, normalized_address_or_error_message)
    """
    try:
        valid = validate_email(email, check_deliverability=False)
        return True, valid.normalized
    except EmailNotValidError as e:
        return False, str(e)


def validate_addresses(addresses: Iterable[str], field_name: str) -> None:
    """Validate every address of a message field.

    Args:
        addresses: Addresses to check
        field_name: Message field the addresses belong to

    Raises:
        ValidationError: On the first invalid address
    """
    for address in addresses:
        is_valid, error = validate_email_address(address)
        if not is_valid:
            raise ValidationError(f"Invalid '{field_name}' address {address!r}: {error}")

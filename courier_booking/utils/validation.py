"""
Validation utilities for draft fields.
"""

import re
from decimal import Decimal
from typing import Any, List, Optional, Sequence

from ..core.enums import FieldErrorCode
from ..core.models import FieldError, LocationDetails
from .phone import PhoneNumberParser

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class ValidationUtils:
    """Validation utilities for various data types."""

    @staticmethod
    def is_blank(value: Any) -> bool:
        """True for None, whitespace-only strings and empty collections."""
        if value is None:
            return True
        if isinstance(value, str):
            return not value.strip()
        if isinstance(value, (list, tuple, dict, set)):
            return len(value) == 0
        return False

    @staticmethod
    def validate_email(email: str) -> bool:
        """Basic ``local@domain.tld`` check."""
        if not email:
            return False
        return bool(EMAIL_PATTERN.match(email.strip()))

    @staticmethod
    def validate_phone(phone: str) -> bool:
        """Australian mobile or landline."""
        return PhoneNumberParser.is_valid_australian_number(phone)

    @staticmethod
    def validate_contact(location: LocationDetails, prefix: str) -> List[FieldError]:
        """
        Check populated contact fields of a location.

        Args:
            location: Location to check
            prefix: Dotted path of the location in the draft

        Returns:
            Field errors for malformed email/phone; empty fields are accepted
        """
        errors: List[FieldError] = []
        if location.email.strip() and not ValidationUtils.validate_email(location.email):
            errors.append(FieldError(field=f"{prefix}.email", code=FieldErrorCode.INVALID_EMAIL))
        if location.phone.strip() and not ValidationUtils.validate_phone(location.phone):
            errors.append(FieldError(field=f"{prefix}.phone", code=FieldErrorCode.INVALID_PHONE))
        return errors

    @staticmethod
    def require_location(
        location: LocationDetails, prefix: str, fields: Sequence[str]
    ) -> List[FieldError]:
        """Required-field errors for the given location fields."""
        return [
            FieldError(field=f"{prefix}.{name}", code=FieldErrorCode.REQUIRED)
            for name in fields
            if ValidationUtils.is_blank(getattr(location, name))
        ]

    @staticmethod
    def check_non_negative(value: Optional[Decimal | int], path: str) -> Optional[FieldError]:
        """Field error when a numeric value is negative."""
        if value is not None and value < 0:
            return FieldError(field=path, code=FieldErrorCode.NEGATIVE)
        return None

    @staticmethod
    def sanitize_text(text: str) -> str:
        """
        Remove control characters (keeping newlines and tabs) and trim.

        Args:
            text: Text to sanitize

        Returns:
            Sanitized text
        """
        if not text:
            return ""

        text = re.sub(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]", "", text)
        return text.strip()

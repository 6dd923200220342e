"""
Phone number parsing and validation utilities.
"""

import re
from typing import Optional


class PhoneNumberParser:
    """Phone number parsing utilities for Australian numbers."""

    # Local format after normalisation: 0 + area/mobile digit + 8 digits
    AUSTRALIAN_PATTERN = r"^0[2-478]\d{8}$"

    @classmethod
    def normalize_to_local_format(cls, phone: str) -> Optional[str]:
        """
        Normalize phone number to local Australian format (0XXXXXXXXX).

        Args:
            phone: Phone number in various formats

        Returns:
            Normalized phone number or None if invalid
        """
        if not phone:
            return None

        raw = re.sub(r"\s", "", phone)
        if not re.match(r"^\+?[\d()\-]+$", raw):
            return None

        digits = re.sub(r"\D", "", raw)

        if digits.startswith("61") and len(digits) == 11:
            # +61 4XX XXX XXX -> 04XXXXXXXX
            digits = "0" + digits[2:]
        elif len(digits) == 9 and digits[0] in "2478":
            digits = "0" + digits

        if re.match(cls.AUSTRALIAN_PATTERN, digits):
            return digits
        return None

    @classmethod
    def is_valid_australian_number(cls, phone: str) -> bool:
        """
        Check if phone number is a valid Australian number.

        Accepts ``04XX XXX XXX``, ``+614XXXXXXXX`` and landlines such as ``02 XXXX XXXX``.
        """
        if not phone:
            return False
        compact = re.sub(r"\s", "", phone)
        if not re.match(r"^(\+61|0)[2-478]\d{8}$", compact):
            return False
        return cls.normalize_to_local_format(compact) is not None

    @classmethod
    def format_for_display(cls, phone: str) -> str:
        """
        Format phone number for display purposes.

        Mobiles are grouped ``0400 000 000``, landlines ``02 1234 5678``.
        """
        normalized = cls.normalize_to_local_format(phone)
        if not normalized:
            return phone

        if normalized.startswith("04"):
            return f"{normalized[:4]} {normalized[4:7]} {normalized[7:]}"
        return f"{normalized[:2]} {normalized[2:6]} {normalized[6:]}"

"""
Utility modules for the courier booking engine.
"""

from .phone import PhoneNumberParser
from .money import round_money, to_decimal
from .validation import ValidationUtils
from .logging import configure_logging, get_logger
from .event_log import EventLog

__all__ = [
    "PhoneNumberParser",
    "round_money",
    "to_decimal",
    "ValidationUtils",
    "configure_logging",
    "get_logger",
    "EventLog",
]

"""
Booking-related enums.
"""

from enum import Enum


class ServiceTypeId(str, Enum):
    """Delivery products offered by the booking wizard."""

    STANDARD = "standard"
    LARGE_FREIGHT = "large_freight"
    RECURRING = "recurring"
    MULTI_STOP = "multi_stop"
    WHITE_GLOVE = "white_glove"
    SIGNATURE_SERVICE = "signature_service"
    DOCUMENT_DESTRUCTION = "document_destruction"
    RUBBISH_REMOVAL = "rubbish_removal"
    ELECTRONIC_RECYCLING = "electronic_recycling"


class StepId(str, Enum):
    """Registry of wizard steps a service type can use."""

    SERVICE = "service"
    PICKUP = "pickup"
    DROPOFF = "dropoff"
    PACKAGE = "package"
    FREIGHT = "freight"
    SCHEDULE = "schedule"
    STOPS = "stops"
    OPTIONS = "options"
    DOCUMENT = "document"
    SIGNATURE = "signature"
    RETURN = "return"
    CONTAINERS = "containers"
    LOCATION = "location"
    RUBBISH = "rubbish"
    ITEMS = "items"
    REVIEW = "review"


class ServiceLevel(str, Enum):
    """Delivery urgency; scales the distance component of the price."""

    STANDARD = "standard"
    SAME_DAY = "same_day"
    VIP = "vip"


class FreightVehicle(str, Enum):
    """Vehicle classes for large freight."""

    UTE = "ute"
    VAN = "van"
    SMALL_TRUCK = "small_truck"
    LARGE_TRUCK = "large_truck"


class RecurringFrequency(str, Enum):
    """Repeat frequency for recurring bookings."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class MultiStopType(str, Enum):
    """Whether additional stops are pickups or drop-offs."""

    MULTI_PICKUP = "multi_pickup"
    MULTI_DROPOFF = "multi_dropoff"


class RubbishType(str, Enum):
    """Rubbish categories accepted for removal."""

    GENERAL = "general"
    GREEN = "green"
    CONSTRUCTION = "construction"
    MIXED = "mixed"

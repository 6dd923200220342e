"""
Configuration management for the courier booking engine.
"""

from .settings import Settings, get_settings
from .pricing import PricingConfig, RubbishTier, ServiceRate, ShredContainerType
from .external_apis import BackendAPIConfig

__all__ = [
    "Settings",
    "get_settings",
    "PricingConfig",
    "RubbishTier",
    "ServiceRate",
    "ShredContainerType",
    "BackendAPIConfig",
]

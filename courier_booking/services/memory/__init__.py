"""
Memory service module.
"""

from .session_store import WizardFactory, WizardSessionStore

__all__ = ["WizardFactory", "WizardSessionStore"]

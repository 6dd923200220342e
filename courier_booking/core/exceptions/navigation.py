"""
Step navigation exceptions.
"""

from typing import Sequence

from .booking import BookingFlowError


class NavigationError(BookingFlowError):
    """Base exception for invalid wizard transitions."""
    pass


class NoServiceSelected(NavigationError):
    """Raised when a step transition needs a selected service type."""
    pass


class ServiceAlreadySelected(NavigationError):
    """Raised when selecting a service while one is already selected."""
    pass


class AtTerminalStep(NavigationError):
    """Raised when advancing past the review step."""
    pass


class CannotSkipAhead(NavigationError):
    """Raised when jumping to a step that has not been reached yet."""

    def __init__(self, index: int, current: int) -> None:
        super().__init__(f"Cannot jump to step {index} from step {current}")
        self.index = index
        self.current = current


class InvalidStepIndex(NavigationError):
    """Raised for step indices outside the service type's step list."""
    pass


class StepRequirementsNotMet(NavigationError):
    """Raised when leaving a step whose required fields are still empty."""

    def __init__(self, step: str, missing: Sequence[str]) -> None:
        super().__init__(f"Step '{step}' requires: {', '.join(missing)}")
        self.step = step
        self.missing = list(missing)

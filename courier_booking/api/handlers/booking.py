"""
Booking wizard HTTP handler.
"""

from decimal import Decimal
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Header, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from ...core.enums import BookingOutcome
from ...core.exceptions import (
    BookingFlowError,
    CatalogError,
    DraftError,
    InvalidQuantity,
    NavigationError,
    SessionNotFound,
    UnknownServiceType,
)
from ...core.models import AccountContext, PriceEstimate, SubmissionResult
from ...services.booking import BookingWizard, ServiceCatalog
from ...services.memory import WizardSessionStore


class SelectServiceRequest(BaseModel):
    service_type: str


class FieldUpdateRequest(BaseModel):
    """Set or merge ``value`` at a dotted draft path."""
    path: str
    value: Any = None


class JumpRequest(BaseModel):
    index: int


class StepView(BaseModel):
    id: str
    title: str


class ServiceTypeView(BaseModel):
    id: str
    name: str
    description: str
    priority: int
    steps: List[StepView]


class WizardStateView(BaseModel):
    service_type: Optional[str] = None
    step_index: int
    step_id: Optional[str] = None
    steps: List[str]
    is_terminal: bool


class SessionView(BaseModel):
    """Everything a client needs to render the current wizard screen."""
    session_id: str
    state: WizardStateView
    draft: Dict[str, Any]
    estimate: Optional[PriceEstimate] = None
    distance_km: Decimal
    currency: str


class SubmissionView(BaseModel):
    session_id: str
    result: SubmissionResult
    state: WizardStateView


_OUTCOME_STATUS = {
    BookingOutcome.SUBMISSION_SUCCEEDED: status.HTTP_201_CREATED,
    BookingOutcome.VALIDATION_FAILED: status.HTTP_422_UNPROCESSABLE_ENTITY,
    BookingOutcome.SUBMISSION_FAILED: status.HTTP_502_BAD_GATEWAY,
    BookingOutcome.SUBMISSION_TIMED_OUT: status.HTTP_504_GATEWAY_TIMEOUT,
    BookingOutcome.SUBMISSION_IN_PROGRESS: status.HTTP_409_CONFLICT,
}


def status_for_error(exc: BookingFlowError) -> int:
    """HTTP status for a booking flow error."""
    if isinstance(exc, (UnknownServiceType, SessionNotFound)):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, (NavigationError, CatalogError)):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, (DraftError, InvalidQuantity)):
        return status.HTTP_422_UNPROCESSABLE_ENTITY
    return status.HTTP_400_BAD_REQUEST


async def booking_error_handler(request: Request, exc: BookingFlowError) -> JSONResponse:
    """Render booking flow errors as ``{"code", "message"}``."""
    body: Dict[str, Any] = {"code": type(exc).__name__, "message": str(exc)}
    missing = getattr(exc, "missing", None)
    if missing:
        body["missing"] = missing
    return JSONResponse(status_code=status_for_error(exc), content=body)


def get_account(
    x_user_id: Optional[str] = Header(default=None),
    x_tenant_id: Optional[str] = Header(default=None),
) -> AccountContext:
    """Identity of the caller as forwarded by the auth gateway."""
    return AccountContext(user_id=x_user_id, tenant_id=x_tenant_id)


class BookingHandler:
    """Handler for booking wizard sessions."""

    def __init__(self, sessions: WizardSessionStore, catalog: ServiceCatalog, currency: str):
        self.sessions = sessions
        self.catalog = catalog
        self.currency = currency
        self.router = APIRouter()
        self._setup_routes()

    def _state_view(self, wizard: BookingWizard) -> WizardStateView:
        state = wizard.state
        return WizardStateView(
            service_type=state.service_type.value if state.service_type else None,
            step_index=state.step_index,
            step_id=state.step_id.value if state.step_id else None,
            steps=[step.value for step in wizard.steps],
            is_terminal=wizard.sequencer.is_terminal,
        )

    def _session_view(self, session_id: str, wizard: BookingWizard) -> SessionView:
        return SessionView(
            session_id=session_id,
            state=self._state_view(wizard),
            draft=wizard.snapshot().model_dump(mode="json"),
            estimate=wizard.estimate,
            distance_km=wizard.distance_km,
            currency=self.currency,
        )

    def _setup_routes(self):
        """Setup booking routes."""

        @self.router.get("/service-types", response_model=List[ServiceTypeView])
        async def list_service_types():
            """Available service types in display order."""
            return [
                ServiceTypeView(
                    id=definition.id.value,
                    name=definition.name,
                    description=definition.description,
                    priority=definition.priority,
                    steps=[StepView(id=s.id.value, title=s.title) for s in definition.steps],
                )
                for definition in self.catalog.list_available_service_types()
            ]

        @self.router.post(
            "/bookings/sessions",
            response_model=SessionView,
            status_code=status.HTTP_201_CREATED,
        )
        async def create_session(account: AccountContext = Depends(get_account)):
            """Start a new booking wizard."""
            session_id, wizard = await self.sessions.create(account)
            return self._session_view(session_id, wizard)

        @self.router.get("/bookings/sessions/{session_id}", response_model=SessionView)
        async def get_session(session_id: str):
            wizard = await self.sessions.get(session_id)
            return self._session_view(session_id, wizard)

        @self.router.delete("/bookings/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
        async def cancel_session(session_id: str):
            """Cancel the booking and discard the session."""
            wizard = await self.sessions.get(session_id)
            wizard.cancel()
            await self.sessions.delete(session_id)

        @self.router.post("/bookings/sessions/{session_id}/select", response_model=SessionView)
        async def select_service(session_id: str, body: SelectServiceRequest):
            wizard = await self.sessions.get(session_id)
            wizard.select_service(body.service_type)
            return self._session_view(session_id, wizard)

        @self.router.patch("/bookings/sessions/{session_id}/fields", response_model=SessionView)
        async def update_field(session_id: str, body: FieldUpdateRequest):
            wizard = await self.sessions.get(session_id)
            wizard.update_field(body.path, body.value)
            return self._session_view(session_id, wizard)

        @self.router.post("/bookings/sessions/{session_id}/advance", response_model=SessionView)
        async def advance(session_id: str):
            wizard = await self.sessions.get(session_id)
            wizard.advance()
            return self._session_view(session_id, wizard)

        @self.router.post("/bookings/sessions/{session_id}/retreat", response_model=SessionView)
        async def retreat(session_id: str):
            wizard = await self.sessions.get(session_id)
            wizard.retreat()
            return self._session_view(session_id, wizard)

        @self.router.post("/bookings/sessions/{session_id}/jump", response_model=SessionView)
        async def jump(session_id: str, body: JumpRequest):
            wizard = await self.sessions.get(session_id)
            wizard.jump_to(body.index)
            return self._session_view(session_id, wizard)

        @self.router.post("/bookings/sessions/{session_id}/distance", response_model=SessionView)
        async def refresh_distance(session_id: str):
            """Recompute the route distance and the estimate."""
            wizard = await self.sessions.get(session_id)
            await wizard.refresh_distance()
            return self._session_view(session_id, wizard)

        @self.router.post("/bookings/sessions/{session_id}/submit", response_model=SubmissionView)
        async def submit(session_id: str):
            wizard = await self.sessions.get(session_id)
            result = await wizard.submit()
            view = SubmissionView(
                session_id=session_id,
                result=result,
                state=self._state_view(wizard),
            )
            return JSONResponse(
                status_code=_OUTCOME_STATUS[result.outcome],
                content=view.model_dump(mode="json"),
            )

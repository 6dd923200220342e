"""
In-process store of active booking wizard sessions.
"""

import asyncio
import uuid
from collections import OrderedDict
from typing import Callable, Tuple

from ...core.exceptions import SessionNotFound
from ...core.models import AccountContext
from ...utils.logging import get_logger
from ..booking import BookingWizard

logger = get_logger("courier.sessions")

WizardFactory = Callable[[AccountContext], BookingWizard]


class WizardSessionStore:
    """Map session ids to live wizards.

    Drafts are never persisted; a session lives as long as the process or
    until it is cancelled, submitted away, or evicted as the oldest.
    """

    def __init__(self, factory: WizardFactory, max_sessions: int = 1000) -> None:
        self.factory = factory
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, BookingWizard]" = OrderedDict()
        self._lock = asyncio.Lock()

    async def create(self, account: AccountContext) -> Tuple[str, BookingWizard]:
        """Start a new wizard session for an account."""
        session_id = uuid.uuid4().hex
        wizard = self.factory(account)
        async with self._lock:
            self._sessions[session_id] = wizard
            while len(self._sessions) > self.max_sessions:
                evicted, _ = self._sessions.popitem(last=False)
                logger.info("Evicted booking session %s", evicted)
        return session_id, wizard

    async def get(self, session_id: str) -> BookingWizard:
        """
        Get a live wizard.

        Raises:
            SessionNotFound: If the session does not exist
        """
        async with self._lock:
            wizard = self._sessions.get(session_id)
            if wizard is None:
                raise SessionNotFound(session_id)
            self._sessions.move_to_end(session_id)
            return wizard

    async def delete(self, session_id: str) -> bool:
        """Drop a session; returns False when it did not exist."""
        async with self._lock:
            return self._sessions.pop(session_id, None) is not None

    async def count(self) -> int:
        async with self._lock:
            return len(self._sessions)

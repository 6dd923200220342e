"""
JSON-lines log of booking outcomes.
"""

import json
from pathlib import Path
from typing import Any, Dict, List

from ..core.models import BookingEvent


class EventLog:
    """Append booking events to a JSONL file.

    Implements the ``OutcomeNotifier`` port so it can be handed straight to
    the submission coordinator.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def log_event(self, event: str, data: Dict[str, Any]) -> None:
        """Append an event to the log as a JSON line."""
        record = {"event": event, **data}
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("a", encoding="utf-8") as f:
            json.dump(record, f, ensure_ascii=False)
            f.write("\n")

    def notify(self, event: BookingEvent) -> None:
        self.log_event(event.outcome.value, event.model_dump(mode="json", exclude={"outcome"}))

    def read_events(self) -> List[Dict[str, Any]]:
        """Read back all logged events (oldest first)."""
        if not self.path.exists():
            return []
        with self.path.open("r", encoding="utf-8") as f:
            return [json.loads(line) for line in f if line.strip()]

from typing import Optional, Set

from sendtemp.event_hub import event_hub, SESSION_CLOSED, SESSION_OPENED, TICK_COMPLETED
from sendtemp.models.tick_report import TickReport


class StatusTracker:
    """Keeps the latest loop outcome and connected devices, fed from the event hub."""

    def __init__(self):
        self.last_report: Optional[TickReport] = None
        self.connected: Set[str] = set()
        self.subscribe()

    def subscribe(self):
        event_hub.subscribe(TICK_COMPLETED, self._on_tick)
        event_hub.subscribe(SESSION_OPENED, self._on_session_opened)
        event_hub.subscribe(SESSION_CLOSED, self._on_session_closed)

    def reset(self):
        self.last_report = None
        self.connected.clear()

    def _on_tick(self, topic, report: TickReport):
        self.last_report = report

    def _on_session_opened(self, topic, path: str):
        self.connected.add(path)

    def _on_session_closed(self, topic, path: str):
        self.connected.discard(path)


# Global instance
status_tracker = StatusTracker()

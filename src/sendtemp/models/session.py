import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from sendtemp.models.device import DeviceHandle


class SessionState(Enum):
    """Externally visible session states."""
    CONNECTED = "connected"
    DISCONNECTED = "disconnected"
    CLOSED = "closed"


@dataclass
class Session:
    """One open communication channel to a physical device."""
    handle: DeviceHandle
    connection: Any
    created_at: float = field(default_factory=time.time)
    last_write_at: Optional[float] = None
    writes: int = 0
    state: SessionState = SessionState.CONNECTED

    @property
    def is_live(self) -> bool:
        return self.state == SessionState.CONNECTED

    def record_write(self):
        """Record a successful frame write."""
        self.last_write_at = time.time()
        self.writes += 1

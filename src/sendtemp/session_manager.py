import logging
from typing import Dict, List

from sendtemp.event_hub import event_hub, SESSION_CLOSED, SESSION_OPENED
from sendtemp.exceptions import WriteError
from sendtemp.models.device import DeviceHandle
from sendtemp.models.session import Session, SessionState
from sendtemp.transport.base import Transport

logger = logging.getLogger(__name__)


class SessionManager:
    """
    Owns the open connections to discovered devices.

    Holds at most one session per device handle. A failed write discards the
    session immediately; reopening is left to the caller's next discovery pass.
    """

    def __init__(self, transport: Transport):
        self.transport = transport
        self.sessions: Dict[DeviceHandle, Session] = {}

    def __len__(self) -> int:
        return len(self.sessions)

    def __enter__(self) -> "SessionManager":
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close_all()

    def has_session(self, handle: DeviceHandle) -> bool:
        return handle in self.sessions

    def live_sessions(self) -> List[Session]:
        return list(self.sessions.values())

    def ensure_session(self, handle: DeviceHandle) -> Session:
        """
        Return the live session for a handle, opening one if needed.

        Raises:
            OpenError: if the device cannot be opened
        """
        session = self.sessions.get(handle)
        if session is not None:
            return session

        # Raises OpenError, nothing is recorded for this handle in that case
        connection = self.transport.open(handle)
        session = Session(handle=handle, connection=connection)
        self.sessions[handle] = session
        logger.info(f"✓ Opened HID device {handle.describe()}")
        event_hub.send_all_on_topic(SESSION_OPENED, handle.path)
        return session

    def send(self, session: Session, frame: bytes):
        """
        Write a frame to a session.

        Raises:
            WriteError: if the write fails; the session has been discarded
        """
        try:
            self.transport.write(session.connection, frame)
        except WriteError:
            self.discard(session, SessionState.DISCONNECTED)
            raise
        session.record_write()

    def discard(self, session: Session, state: SessionState = SessionState.DISCONNECTED):
        """Release a session's connection and forget it."""
        if self.sessions.get(session.handle) is session:
            del self.sessions[session.handle]
        session.state = state
        self._release(session)
        if state == SessionState.DISCONNECTED:
            logger.warning(f"⚠ Lost HID device {session.handle.path}")
        else:
            logger.info(f"Closed HID device {session.handle.path}")
        event_hub.send_all_on_topic(SESSION_CLOSED, session.handle.path)

    def close_all(self):
        """Release every live session."""
        for session in list(self.sessions.values()):
            self.discard(session, SessionState.CLOSED)

    def _release(self, session: Session):
        try:
            self.transport.close(session.connection)
        except Exception as e:
            # The device may already be gone
            logger.debug(f"Close of {session.handle.path} failed: {e}")

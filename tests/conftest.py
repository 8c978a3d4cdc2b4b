"""Pytest configuration and fixtures for test suite."""
from typing import Dict, List, Optional

import pytest

from sendtemp.device_locator import DeviceLocator
from sendtemp.event_hub import event_hub
from sendtemp.exceptions import OpenError, WriteError
from sendtemp.models.device import DeviceHandle, TARGET_IDENTITY
from sendtemp.models.scheduler_config import SchedulerConfig
from sendtemp.session_manager import SessionManager
from sendtemp.status import status_tracker
from sendtemp.update_scheduler import UpdateScheduler


class FakeSensor:
    """Returns queued readings in order, then repeats the last one."""

    source = "fake"

    def __init__(self, readings: Optional[List[Optional[float]]] = None):
        self.readings = list(readings) if readings else [45.0]
        self.reads = 0

    def read_cpu_temperature(self) -> Optional[float]:
        index = min(self.reads, len(self.readings) - 1)
        self.reads += 1
        return self.readings[index]


class FakeConnection:
    def __init__(self, path: str):
        self.path = path
        self.closed = False


class FakeTransport:
    """Scriptable transport recording every open, write and close."""

    def __init__(self, handles: Optional[List[DeviceHandle]] = None):
        self.handles: List[DeviceHandle] = list(handles or [])
        self.open_failures: set = set()
        self.write_failures: set = set()
        self.fail_close = False
        self.opened: List[str] = []
        self.closed: List[str] = []
        self.frames: Dict[str, List[bytes]] = {}
        self.enumerations = 0

    def enumerate(self, vendor_id: int, product_id: int) -> List[DeviceHandle]:
        self.enumerations += 1
        return list(self.handles)

    def open(self, handle: DeviceHandle) -> FakeConnection:
        if handle.path in self.open_failures:
            raise OpenError(handle.path, "permission denied")
        self.opened.append(handle.path)
        return FakeConnection(handle.path)

    def write(self, connection: FakeConnection, data: bytes) -> int:
        if connection.path in self.write_failures:
            raise WriteError(connection.path, "broken pipe")
        self.frames.setdefault(connection.path, []).append(bytes(data))
        return len(data)

    def close(self, connection: FakeConnection) -> None:
        connection.closed = True
        self.closed.append(connection.path)
        if self.fail_close:
            raise OSError("device already gone")


def make_handle(path: str = "/dev/hidraw0", vendor_id: int = TARGET_IDENTITY.vendor_id,
                product_id: int = TARGET_IDENTITY.product_id) -> DeviceHandle:
    return DeviceHandle(path=path, vendor_id=vendor_id, product_id=product_id,
                        manufacturer="ACME", product="Cooler Display")


@pytest.fixture(autouse=True)
def reset_event_hub():
    """Keep the global event hub and status tracker isolated between tests."""
    event_hub.init(None)
    status_tracker.reset()
    yield
    event_hub.init(None)
    status_tracker.reset()


@pytest.fixture
def handle() -> DeviceHandle:
    return make_handle()


@pytest.fixture
def transport(handle) -> FakeTransport:
    return FakeTransport([handle])


@pytest.fixture
def sensor() -> FakeSensor:
    return FakeSensor([45.34])


@pytest.fixture
def sessions(transport) -> SessionManager:
    return SessionManager(transport)


@pytest.fixture
def scheduler(transport, sensor, sessions) -> UpdateScheduler:
    return UpdateScheduler(
        SchedulerConfig(tick_interval=0.01), sensor, DeviceLocator(transport), sessions
    )

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from sendtemp.exceptions import OpenError, WriteError
from sendtemp.models.device import DeviceHandle, DeviceIdentity, TARGET_IDENTITY
from sendtemp.processing.frame_encoder import describe_frame

logger = logging.getLogger(__name__)


@dataclass
class EmulatedConnection:
    path: str
    frames: List[bytes] = field(default_factory=list)
    closed: bool = False


class EmulatedTransport:
    """
    In-memory stand-in for the HID transport.

    Exposes a fixed number of virtual displays that record every frame
    written to them. Devices can be unplugged and replugged to exercise
    the reconnection path without hardware.
    """

    def __init__(self, device_count: int = 1, identity: DeviceIdentity = TARGET_IDENTITY):
        self.identity = identity
        self.devices: Dict[str, DeviceHandle] = {}
        self.unplugged: set = set()
        self.connections: List[EmulatedConnection] = []
        for index in range(device_count):
            path = f"emulated/{index}"
            self.devices[path] = DeviceHandle(
                path=path,
                vendor_id=identity.vendor_id,
                product_id=identity.product_id,
                serial_number=f"EMU{index:04d}",
                manufacturer="sendtemp",
                product="Emulated display",
            )

    def unplug(self, path: str):
        self.unplugged.add(path)

    def replug(self, path: str):
        self.unplugged.discard(path)

    def enumerate(self, vendor_id: int, product_id: int) -> List[DeviceHandle]:
        if not self.identity.matches(vendor_id, product_id):
            return []
        return [handle for path, handle in self.devices.items() if path not in self.unplugged]

    def open(self, handle: DeviceHandle) -> EmulatedConnection:
        if handle.path not in self.devices or handle.path in self.unplugged:
            raise OpenError(handle.path, "no such device")
        connection = EmulatedConnection(path=handle.path)
        self.connections.append(connection)
        return connection

    def write(self, connection: EmulatedConnection, data: bytes) -> int:
        if connection.closed or connection.path in self.unplugged:
            raise WriteError(connection.path, "device disconnected")
        connection.frames.append(bytes(data))
        logger.debug(f"[Emulated] {connection.path} <- {describe_frame(data)}")
        return len(data)

    def close(self, connection: EmulatedConnection) -> None:
        connection.closed = True

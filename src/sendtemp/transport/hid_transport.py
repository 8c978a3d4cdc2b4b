"""
HID transport on top of the hidapi library.
"""
import logging
from dataclasses import dataclass
from typing import Any, List

import hid

from sendtemp.exceptions import OpenError, TransportInitError, WriteError
from sendtemp.models.device import DeviceHandle

logger = logging.getLogger(__name__)


def _decode_path(path) -> str:
    if isinstance(path, bytes):
        return path.decode("utf-8", errors="surrogateescape")
    return str(path)


def _encode_path(path: str) -> bytes:
    return path.encode("utf-8", errors="surrogateescape")


@dataclass
class HidConnection:
    """An opened hidapi device together with the path it was opened from."""
    path: str
    device: Any


class HidTransport:
    """Enumerates, opens and writes to HID devices through hidapi."""

    def __init__(self):
        try:
            # Enumerate the HID subsystem once so a broken backend fails at startup
            hid.enumerate(0, 0)
        except (OSError, RuntimeError) as e:
            raise TransportInitError(f"Failed to initialize HID API: {e}") from e

    def enumerate(self, vendor_id: int, product_id: int) -> List[DeviceHandle]:
        handles = []
        for info in hid.enumerate(vendor_id, product_id):
            handles.append(DeviceHandle(
                path=_decode_path(info.get("path", b"")),
                vendor_id=info.get("vendor_id", 0),
                product_id=info.get("product_id", 0),
                serial_number=info.get("serial_number") or "",
                manufacturer=info.get("manufacturer_string") or "",
                product=info.get("product_string") or "",
            ))
        return handles

    def open(self, handle: DeviceHandle) -> HidConnection:
        logger.debug(f"Opening HID device {handle.path}")
        device = hid.device()
        try:
            device.open_path(_encode_path(handle.path))
        except (OSError, ValueError) as e:
            raise OpenError(handle.path, str(e)) from e
        return HidConnection(path=handle.path, device=device)

    def write(self, connection: HidConnection, data: bytes) -> int:
        try:
            written = connection.device.write(data)
        except (OSError, ValueError) as e:
            raise WriteError(connection.path, str(e)) from e
        if written < 0:
            raise WriteError(connection.path, "hid_write returned an error")
        if written < len(data):
            raise WriteError(connection.path, f"short write ({written}/{len(data)} bytes)")
        return written

    def close(self, connection: HidConnection) -> None:
        connection.device.close()

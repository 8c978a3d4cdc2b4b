from typing import Any, List, Protocol

from sendtemp.models.device import DeviceHandle


class Transport(Protocol):
    """Byte-oriented access to USB HID endpoints."""

    def enumerate(self, vendor_id: int, product_id: int) -> List[DeviceHandle]:
        """List attached devices matching the identifiers."""
        ...

    def open(self, handle: DeviceHandle) -> Any:
        """Open a connection. Raises OpenError."""
        ...

    def write(self, connection: Any, data: bytes) -> int:
        """Write data and return the number of bytes written. Raises WriteError."""
        ...

    def close(self, connection: Any) -> None:
        ...

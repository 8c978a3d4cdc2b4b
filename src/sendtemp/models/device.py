"""Device identity and discovery handle models."""
from dataclasses import dataclass, field


@dataclass(frozen=True)
class DeviceIdentity:
    """Vendor/product identifier pair of a USB HID product family."""
    vendor_id: int
    product_id: int

    def __post_init__(self):
        for name in ("vendor_id", "product_id"):
            value = getattr(self, name)
            if not 0 <= value <= 0xFFFF:
                raise ValueError(f"{name} must be a 16-bit unsigned value, got {value}")

    def matches(self, vendor_id: int, product_id: int) -> bool:
        return self.vendor_id == vendor_id and self.product_id == product_id

    def __str__(self) -> str:
        return f"VID: 0x{self.vendor_id:04x}, PID: 0x{self.product_id:04x}"


# Water cooler display
TARGET_IDENTITY = DeviceIdentity(vendor_id=0xaa88, product_id=0x8666)


@dataclass(frozen=True)
class DeviceHandle:
    """
    Reference to a discovered device, valid until the transport invalidates it.

    Handles compare equal on their transport path only; the descriptive
    fields are informational.
    """
    path: str
    vendor_id: int = field(compare=False)
    product_id: int = field(compare=False)
    serial_number: str = field(default="", compare=False)
    manufacturer: str = field(default="", compare=False)
    product: str = field(default="", compare=False)

    def describe(self) -> str:
        parts = [self.path]
        if self.manufacturer or self.product:
            parts.append(f"{self.manufacturer} {self.product}".strip())
        if self.serial_number:
            parts.append(f"serial={self.serial_number}")
        return " | ".join(parts)

"""Exceptions raised by the device session layer."""


class SendTempError(Exception):
    """Base class for every error raised by sendtemp."""


class TransportInitError(SendTempError):
    """The HID subsystem itself could not be started."""


class OpenError(SendTempError):
    """A discovered device could not be opened (permission, busy, vanished)."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to open device {path}: {reason}")
        self.path = path
        self.reason = reason


class WriteError(SendTempError):
    """A frame could not be written to an open device."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to write to device {path}: {reason}")
        self.path = path
        self.reason = reason

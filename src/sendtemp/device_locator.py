import logging
from typing import List

from sendtemp.models.device import DeviceHandle, DeviceIdentity
from sendtemp.transport.base import Transport

logger = logging.getLogger(__name__)


class DeviceLocator:
    """Finds attached displays matching a vendor/product identity."""

    def __init__(self, transport: Transport):
        self.transport = transport

    def discover(self, identity: DeviceIdentity) -> List[DeviceHandle]:
        """
        Query the transport for matching devices.

        Args:
            identity: vendor/product pair to match exactly

        Returns:
            Handles in transport enumeration order; empty when nothing is attached
        """
        handles: List[DeviceHandle] = []
        seen = set()
        for handle in self.transport.enumerate(identity.vendor_id, identity.product_id):
            if not identity.matches(handle.vendor_id, handle.product_id):
                continue
            # Some backends list the same interface twice
            if handle.path in seen:
                continue
            seen.add(handle.path)
            handles.append(handle)

        logger.debug(f"Discovery ({identity}) found {len(handles)} device(s)")
        return handles

"""Immutable configuration of the update loop."""
from dataclasses import dataclass

from sendtemp.models.device import DeviceIdentity, TARGET_IDENTITY


@dataclass(frozen=True)
class SchedulerConfig:
    identity: DeviceIdentity = TARGET_IDENTITY
    tick_interval: float = 1.0  # seconds

    def __post_init__(self):
        if self.tick_interval <= 0:
            raise ValueError(f"tick_interval must be positive, got {self.tick_interval}")

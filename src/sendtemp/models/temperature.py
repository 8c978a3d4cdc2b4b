"""
Temperature sample model.
"""
import math
import time
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class TemperatureSample:
    """
    A single CPU temperature reading, or the marker that none was available.
    """
    celsius: Optional[float]
    source: str = ""
    timestamp: float = field(default_factory=time.time)

    @property
    def available(self) -> bool:
        return self.celsius is not None and math.isfinite(self.celsius)

    @classmethod
    def unavailable(cls, source: str = "") -> "TemperatureSample":
        return cls(celsius=None, source=source)

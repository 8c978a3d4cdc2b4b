from dataclasses import dataclass, field
from typing import List, Optional

from sendtemp.models.temperature import TemperatureSample


@dataclass
class TickReport:
    """Outcome of one update loop iteration."""
    tick: int
    sample: TemperatureSample
    frame: Optional[bytes] = None
    candidates: int = 0
    opened: List[str] = field(default_factory=list)
    open_failures: List[str] = field(default_factory=list)
    sent: List[str] = field(default_factory=list)
    write_failures: List[str] = field(default_factory=list)

    @property
    def skipped(self) -> bool:
        """True when no frame was produced because the sensor was unavailable."""
        return self.frame is None

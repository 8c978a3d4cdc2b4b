from typing import Optional, Protocol


class TemperatureSensor(Protocol):
    """Anything that can report the current CPU temperature."""

    def read_cpu_temperature(self) -> Optional[float]:
        """Current temperature in Celsius, or None when unavailable."""
        ...

import math
import random
import time
from typing import Optional


class EmulatedTemperatureSensor:
    """Produces a slow sine wave around a base temperature, for running without hardware."""

    source = "emulated"

    def __init__(self, base: float = 45.0, amplitude: float = 10.0, period: float = 60.0, noise: float = 0.3):
        self.base = base
        self.amplitude = amplitude
        self.period = period
        self.noise = noise
        self._start_time = time.time()

    def read_cpu_temperature(self) -> Optional[float]:
        elapsed = time.time() - self._start_time
        value = self.base + self.amplitude * math.sin(2 * math.pi * elapsed / self.period)
        return value + random.uniform(-self.noise, self.noise)

import logging
import math
from pathlib import Path
from typing import Iterable, Optional, Tuple

from sendtemp.models.config_data import configSensorData

logger = logging.getLogger(__name__)


class CpuTemperatureSensor:
    """Reads the CPU package temperature from Linux sysfs (hwmon, then thermal zones)."""

    def __init__(self, config: Optional[configSensorData] = None):
        config = config or configSensorData()
        self.hwmon_root = Path(config.hwmonRoot)
        self.thermal_root = Path(config.thermalRoot)
        self.hwmon_names = [name.lower() for name in config.hwmonNames]
        self.thermal_types = [zone_type.lower() for zone_type in config.thermalTypes]
        self._last_source: Optional[str] = None

    def read_cpu_temperature(self) -> Optional[float]:
        """
        Read the current CPU temperature.

        Returns:
            Temperature in degrees Celsius, or None if no source could be read
        """
        reading = self._read()
        return reading[0] if reading else None

    @property
    def source(self) -> str:
        """Path of the sysfs file the last reading came from."""
        return self._last_source or ""

    def _read(self) -> Optional[Tuple[float, str]]:
        reading = self._read_hwmon() or self._read_thermal_zone()
        source = reading[1] if reading else None
        if source != self._last_source:
            # Log only when the source changes, not every tick
            if source:
                logger.info(f"Reading CPU temperature from {source}")
            else:
                logger.warning("⚠ No CPU temperature source found")
            self._last_source = source
        return reading

    def _read_hwmon(self) -> Optional[Tuple[float, str]]:
        for entry in self._sorted_dirs(self.hwmon_root):
            name = self._read_text(entry / "name")
            if name is None:
                continue
            name = name.lower()
            if not any(candidate in name for candidate in self.hwmon_names):
                continue
            # temp1_input is the package temperature
            input_path = entry / "temp1_input"
            celsius = self._read_millidegrees(input_path)
            if celsius is not None:
                return celsius, str(input_path)
        return None

    def _read_thermal_zone(self) -> Optional[Tuple[float, str]]:
        for entry in self._sorted_dirs(self.thermal_root):
            if not entry.name.startswith("thermal_zone"):
                continue
            zone_type = self._read_text(entry / "type")
            if zone_type is None:
                continue
            zone_type = zone_type.lower()
            if not any(candidate in zone_type for candidate in self.thermal_types):
                continue
            temp_path = entry / "temp"
            celsius = self._read_millidegrees(temp_path)
            if celsius is not None:
                return celsius, str(temp_path)
        return None

    @staticmethod
    def _sorted_dirs(root: Path) -> Iterable[Path]:
        try:
            return sorted(root.iterdir())
        except OSError:
            return []

    @staticmethod
    def _read_text(path: Path) -> Optional[str]:
        try:
            return path.read_text().strip()
        except (OSError, UnicodeDecodeError):
            return None

    @classmethod
    def _read_millidegrees(cls, path: Path) -> Optional[float]:
        text = cls._read_text(path)
        if text is None:
            return None
        try:
            celsius = int(text) / 1000.0
        except (ValueError, OverflowError):
            logger.debug(f"Unparsable temperature in {path}: {text!r}")
            return None
        if not math.isfinite(celsius):
            return None
        return celsius

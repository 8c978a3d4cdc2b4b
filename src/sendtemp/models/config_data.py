from dataclasses import dataclass, field
from typing import List


@dataclass
class configSensorData:
    hwmonRoot: str = "/sys/class/hwmon"
    thermalRoot: str = "/sys/class/thermal"
    hwmonNames: List[str] = field(default_factory=lambda: ["coretemp", "k10temp", "zenpower", "cpu"])
    thermalTypes: List[str] = field(default_factory=lambda: ["cpu", "x86_pkg_temp"])


@dataclass
class configStatusApiData:
    enabled: bool = False
    host: str = "127.0.0.1"
    port: int = 8765


@dataclass
class configData:
    tickInterval: float = 1.0
    emulation: bool = False
    emulatedDevices: int = 1
    sensor: configSensorData = field(default_factory=configSensorData)
    statusApi: configStatusApiData = field(default_factory=configStatusApiData)

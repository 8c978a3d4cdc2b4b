import json
import logging
import os
from pathlib import Path

from sendtemp.models.config_data import configData, configSensorData, configStatusApiData
from sendtemp.models.scheduler_config import SchedulerConfig

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "SENDTEMP_CONFIG"


class ConfigLoader:
    """Loads and manages runtime configuration from a JSON file."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(ConfigLoader, cls).__new__(cls)
            cls._instance._config = configData()
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if not self._initialized:
            self._config = self._get_default_config()
            self.load_config()
            self._initialized = True

    @staticmethod
    def get_config_path() -> Path:
        """Get the path to the sendtemp_config.json file (overridable with SENDTEMP_CONFIG)."""
        override = os.getenv(CONFIG_ENV_VAR)
        if override:
            return Path(override)
        return Path(__file__).parent.parent.parent / "config" / "sendtemp_config.json"

    def load_config(self):
        """Load configuration from JSON file."""
        config_path = self.get_config_path()

        # Start from defaults so a partial file still yields a complete config
        self._config = self._get_default_config()

        if not config_path.exists():
            logger.warning(f"Configuration file not found: {config_path}, using defaults")
            return

        try:
            with open(config_path, 'r') as f:
                json_data = json.load(f)

            defaults = self._config
            sensor_cfg = json_data.get("sensor", {})
            api_cfg = json_data.get("status_api", {})
            self._config = configData(
                tickInterval=float(json_data.get("tick_interval", defaults.tickInterval)),
                emulation=bool(json_data.get("emulation", defaults.emulation)),
                emulatedDevices=int(json_data.get("emulated_devices", defaults.emulatedDevices)),
                sensor=configSensorData(
                    hwmonRoot=sensor_cfg.get("hwmon_root", defaults.sensor.hwmonRoot),
                    thermalRoot=sensor_cfg.get("thermal_root", defaults.sensor.thermalRoot),
                    hwmonNames=list(sensor_cfg.get("hwmon_names", defaults.sensor.hwmonNames)),
                    thermalTypes=list(sensor_cfg.get("thermal_types", defaults.sensor.thermalTypes)),
                ),
                statusApi=configStatusApiData(
                    enabled=bool(api_cfg.get("enabled", defaults.statusApi.enabled)),
                    host=api_cfg.get("host", defaults.statusApi.host),
                    port=int(api_cfg.get("port", defaults.statusApi.port)),
                ),
            )
            if self._config.tickInterval <= 0:
                logger.error(f"Invalid tick_interval {self._config.tickInterval}, using default")
                self._config.tickInterval = defaults.tickInterval
            logger.info(f"Configuration loaded from {config_path}")

        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse configuration file: {e}")
            self._config = self._get_default_config()

        except (TypeError, ValueError, AttributeError) as e:
            logger.error(f"Invalid value in configuration file: {e}")
            self._config = self._get_default_config()

    @staticmethod
    def _get_default_config() -> configData:
        """Return default configuration."""
        return configData()

    def get_config(self) -> configData:
        return self._config

    def get_emulation_mode(self) -> bool:
        return self._config.emulation

    def get_tick_interval(self) -> float:
        return self._config.tickInterval

    def get_emulated_devices(self) -> int:
        return self._config.emulatedDevices

    def get_sensor_config(self) -> configSensorData:
        return self._config.sensor

    def get_status_api_config(self) -> configStatusApiData:
        return self._config.statusApi

    def get_scheduler_config(self) -> SchedulerConfig:
        """Build the immutable loop configuration. The device identity is fixed."""
        return SchedulerConfig(tick_interval=self._config.tickInterval)

    def reload_config(self):
        """Reload configuration from file."""
        self.load_config()
        logger.info("Configuration reloaded")


# Global singleton instance
config_loader = ConfigLoader()

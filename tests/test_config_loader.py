import json

import pytest

from sendtemp.config_loader import ConfigLoader, config_loader


@pytest.fixture
def config_file(tmp_path, monkeypatch):
    """Point the loader at a temporary file and restore the default config afterwards."""
    path = tmp_path / "sendtemp_config.json"
    monkeypatch.setenv("SENDTEMP_CONFIG", str(path))
    yield path
    monkeypatch.delenv("SENDTEMP_CONFIG")
    config_loader.reload_config()


class TestConfigLoader:
    """Test configuration loading and access."""

    def test_config_singleton(self):
        assert ConfigLoader() is config_loader

    def test_repository_config_loads(self):
        config_loader.reload_config()
        assert config_loader.get_tick_interval() == 1.0
        assert config_loader.get_emulation_mode() == False
        assert config_loader.get_status_api_config().enabled == False

    def test_loads_values(self, config_file):
        config_file.write_text(json.dumps({
            "tick_interval": 2.5,
            "emulation": True,
            "emulated_devices": 2,
            "sensor": {"hwmon_root": "/tmp/hwmon", "hwmon_names": ["k10temp"]},
            "status_api": {"enabled": True, "port": 9000},
        }))
        config_loader.reload_config()

        assert config_loader.get_tick_interval() == 2.5
        assert config_loader.get_emulation_mode() == True
        assert config_loader.get_emulated_devices() == 2
        sensor = config_loader.get_sensor_config()
        assert sensor.hwmonRoot == "/tmp/hwmon"
        assert sensor.hwmonNames == ["k10temp"]
        assert sensor.thermalRoot == "/sys/class/thermal"
        api = config_loader.get_status_api_config()
        assert api.enabled == True
        assert api.port == 9000
        assert api.host == "127.0.0.1"

    def test_missing_file_uses_defaults(self, config_file):
        config_loader.reload_config()
        assert config_loader.get_tick_interval() == 1.0
        assert config_loader.get_emulation_mode() == False

    def test_invalid_json_uses_defaults(self, config_file):
        config_file.write_text("{ not json")
        config_loader.reload_config()
        assert config_loader.get_tick_interval() == 1.0

    def test_invalid_interval_uses_default(self, config_file):
        config_file.write_text(json.dumps({"tick_interval": -1}))
        config_loader.reload_config()
        assert config_loader.get_tick_interval() == 1.0

    def test_scheduler_config_identity_is_fixed(self, config_file):
        config_file.write_text(json.dumps({"tick_interval": 0.5, "vendor_id": 1}))
        config_loader.reload_config()
        scheduler_config = config_loader.get_scheduler_config()
        assert scheduler_config.tick_interval == 0.5
        assert scheduler_config.identity.vendor_id == 0xaa88
        assert scheduler_config.identity.product_id == 0x8666

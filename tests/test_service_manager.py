import asyncio

import pytest
from conftest import FakeSensor, FakeTransport, make_handle

from sendtemp import service_manager as service_manager_module
from sendtemp.exceptions import TransportInitError
from sendtemp.sensors.cpu_temperature import CpuTemperatureSensor
from sendtemp.sensors.emulated import EmulatedTemperatureSensor
from sendtemp.service_manager import ServiceManager, create_sensor, create_transport
from sendtemp.status import status_tracker
from sendtemp.transport.emulated import EmulatedTransport


class TestFactories:
    """Test construction of sensors and transports."""

    def test_emulated_transport(self):
        assert isinstance(create_transport(emulation=True), EmulatedTransport)

    def test_emulated_sensor(self):
        assert isinstance(create_sensor(emulation=True), EmulatedTemperatureSensor)

    def test_hardware_sensor(self):
        assert isinstance(create_sensor(emulation=False), CpuTemperatureSensor)

    def test_missing_hid_library_is_init_error(self, monkeypatch):
        import builtins

        real_import = builtins.__import__

        def failing_import(name, *args, **kwargs):
            if name == "sendtemp.transport.hid_transport":
                raise ImportError("libhidapi not found")
            return real_import(name, *args, **kwargs)

        monkeypatch.setattr(builtins, "__import__", failing_import)
        with pytest.raises(TransportInitError):
            create_transport(emulation=False)


class TestServiceManager:
    """Test wiring and lifecycle of the update loop."""

    def test_build_uses_injected_collaborators(self):
        manager = ServiceManager()
        transport = FakeTransport([make_handle()])
        scheduler = manager.build(tick_interval=0.5, transport=transport, sensor=FakeSensor([33.3]))

        assert scheduler.config.tick_interval == 0.5
        assert scheduler.sessions is manager.sessions
        assert scheduler.tick().sent == ["/dev/hidraw0"]

    @pytest.mark.asyncio
    async def test_start_and_stop_in_emulation(self):
        manager = ServiceManager()
        await manager.start_services(emulation=True, tick_interval=0.01)
        await asyncio.sleep(0.05)

        assert status_tracker.last_report is not None
        assert status_tracker.connected == {"emulated/0"}

        await manager.stop_services()
        assert len(manager.sessions) == 0
        assert status_tracker.connected == set()

    @pytest.mark.asyncio
    async def test_start_twice_keeps_single_loop(self):
        manager = ServiceManager()
        await manager.start_services(emulation=True, tick_interval=0.01)
        scheduler = manager.scheduler
        await manager.start_services(emulation=True, tick_interval=0.01)
        assert manager.scheduler is scheduler
        await manager.stop_services()

    def test_global_instance(self):
        assert isinstance(service_manager_module.service_manager, ServiceManager)

from conftest import FakeSensor, FakeTransport, make_handle

from sendtemp import main as main_module
from sendtemp.exceptions import TransportInitError
from sendtemp.service_manager import service_manager


def test_transport_init_failure_exits_non_zero(monkeypatch):
    def failing_build(*args, **kwargs):
        raise TransportInitError("Failed to initialize HID API: no backend")

    monkeypatch.setattr(main_module.settings, "status_api", False)
    monkeypatch.setattr(service_manager, "build", failing_build)
    assert main_module.main() == 1


def test_headless_run_exits_zero_and_releases(monkeypatch):
    transport = FakeTransport([make_handle()])
    real_build = service_manager.build

    def build(*args, **kwargs):
        return real_build(tick_interval=0.01, transport=transport, sensor=FakeSensor([45.34]))

    async def run_three_ticks(scheduler):
        await scheduler.run(max_ticks=3)

    monkeypatch.setattr(main_module.settings, "status_api", False)
    monkeypatch.setattr(service_manager, "build", build)
    monkeypatch.setattr(service_manager, "run_scheduler", run_three_ticks)

    assert main_module.main() == 0
    assert len(transport.frames["/dev/hidraw0"]) == 3
    assert transport.closed == ["/dev/hidraw0"]

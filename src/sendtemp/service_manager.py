# External libs
import asyncio
import logging
from typing import Optional

# Internal libs
from sendtemp.config_loader import config_loader
from sendtemp.device_locator import DeviceLocator
from sendtemp.event_hub import init_event_hub
from sendtemp.exceptions import TransportInitError
from sendtemp.models.scheduler_config import SchedulerConfig
from sendtemp.sensors.base import TemperatureSensor
from sendtemp.sensors.cpu_temperature import CpuTemperatureSensor
from sendtemp.sensors.emulated import EmulatedTemperatureSensor
from sendtemp.session_manager import SessionManager
from sendtemp.transport.base import Transport
from sendtemp.transport.emulated import EmulatedTransport
from sendtemp.update_scheduler import UpdateScheduler

logger = logging.getLogger(__name__)


def create_transport(emulation: bool) -> Transport:
    """
    Build the device transport.

    Raises:
        TransportInitError: if the HID subsystem cannot be started
    """
    if emulation:
        return EmulatedTransport(device_count=config_loader.get_emulated_devices())
    try:
        from sendtemp.transport.hid_transport import HidTransport
    except ImportError as e:
        # hidapi missing or its native library failed to load
        raise TransportInitError(f"Failed to initialize HID API: {e}") from e
    return HidTransport()


def create_sensor(emulation: bool) -> TemperatureSensor:
    if emulation:
        return EmulatedTemperatureSensor()
    return CpuTemperatureSensor(config_loader.get_sensor_config())


class ServiceManager:

    def __init__(self):
        self.scheduler: Optional[UpdateScheduler] = None
        self.sessions: Optional[SessionManager] = None
        self._task: Optional[asyncio.Task] = None

    def build(
        self,
        emulation: bool = False,
        tick_interval: Optional[float] = None,
        transport: Optional[Transport] = None,
        sensor: Optional[TemperatureSensor] = None,
    ) -> UpdateScheduler:
        """Wire sensor, transport, locator, sessions and scheduler together."""
        config = config_loader.get_scheduler_config()
        if tick_interval is not None:
            config = SchedulerConfig(identity=config.identity, tick_interval=tick_interval)

        transport = transport or create_transport(emulation)
        sensor = sensor or create_sensor(emulation)

        self.sessions = SessionManager(transport)
        self.scheduler = UpdateScheduler(config, sensor, DeviceLocator(transport), self.sessions)
        logger.info(f"Services built in {'emulation' if emulation else 'hardware'} mode")
        return self.scheduler

    async def run_scheduler(self, scheduler: UpdateScheduler):
        """Run a built update loop in the current task until it is stopped."""
        init_event_hub(asyncio.get_running_loop())
        await scheduler.run()

    async def start_services(self, emulation: bool = False, tick_interval: Optional[float] = None):
        """Start the update loop as a background task."""
        if self._task and not self._task.done():
            return
        logger.info("Starting background services...")
        scheduler = self.build(emulation, tick_interval)
        loop = asyncio.get_running_loop()
        init_event_hub(loop)
        self._task = loop.create_task(scheduler.run())
        logger.info("Background services started.")

    async def stop_services(self):
        """Stop the update loop and release every device."""
        if self.scheduler:
            self.scheduler.stop()
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self.sessions:
            self.sessions.close_all()
        logger.info("Background services stopped.")


service_manager = ServiceManager()

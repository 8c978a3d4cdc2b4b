import asyncio
import logging
import time
from typing import Callable, Optional

from sendtemp.device_locator import DeviceLocator
from sendtemp.event_hub import event_hub, TICK_COMPLETED
from sendtemp.exceptions import OpenError, WriteError
from sendtemp.models.scheduler_config import SchedulerConfig
from sendtemp.models.temperature import TemperatureSample
from sendtemp.models.tick_report import TickReport
from sendtemp.processing.frame_encoder import describe_frame, encode_sample
from sendtemp.sensors.base import TemperatureSensor
from sendtemp.session_manager import SessionManager

logger = logging.getLogger(__name__)


class UpdateScheduler:
    """
    Fixed-interval loop pushing the CPU temperature to every attached display.

    Discovery runs on every tick, so a device that is plugged in (or comes
    back after a failure) is picked up on the next tick without any
    hot-plug notification from the transport.
    """

    def __init__(
        self,
        config: SchedulerConfig,
        sensor: TemperatureSensor,
        locator: DeviceLocator,
        sessions: SessionManager,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.config = config
        self.sensor = sensor
        self.locator = locator
        self.sessions = sessions
        self._clock = clock
        self.running = False
        self._stop_requested = False
        self.tick_count = 0
        self.last_report: Optional[TickReport] = None

    def tick(self) -> TickReport:
        """Run a single iteration: read, encode, discover, open, send."""
        self.tick_count += 1
        sample = TemperatureSample(
            celsius=self.sensor.read_cpu_temperature(),
            source=getattr(self.sensor, "source", ""),
        )
        report = TickReport(tick=self.tick_count, sample=sample)

        if not sample.available:
            # Not a device failure: leave every session untouched
            logger.warning("Failed to read CPU temperature, skipping update")
            return self._finish(report)

        report.frame = encode_sample(sample)
        self._refresh_sessions(report)
        self._broadcast(report)
        return self._finish(report)

    def _refresh_sessions(self, report: TickReport):
        candidates = self.locator.discover(self.config.identity)
        report.candidates = len(candidates)
        if not candidates and not len(self.sessions):
            logger.info(f"No device found ({self.config.identity})")
            return

        for handle in candidates:
            if self.sessions.has_session(handle):
                continue
            logger.info(f"Found device: {handle.path}")
            try:
                self.sessions.ensure_session(handle)
                report.opened.append(handle.path)
            except OpenError as e:
                logger.error(f"✗ {e}")
                report.open_failures.append(handle.path)

    def _broadcast(self, report: TickReport):
        frame = report.frame
        for session in self.sessions.live_sessions():
            try:
                self.sessions.send(session, frame)
                report.sent.append(session.handle.path)
            except WriteError as e:
                logger.error(f"✗ {e}")
                report.write_failures.append(session.handle.path)

        if report.sent:
            logger.info(
                f"CPU: {report.sample.celsius:.1f}°C (sending bytes: {describe_frame(frame)}) "
                f"to {len(report.sent)} device(s)"
            )

    def _finish(self, report: TickReport) -> TickReport:
        self.last_report = report
        event_hub.send_all_on_topic(TICK_COMPLETED, report)
        return report

    async def run(self, max_ticks: Optional[int] = None):
        """
        Tick until stop() is called, the task is cancelled, or max_ticks is reached.

        Every open session is released when the loop exits.
        """
        interval = self.config.tick_interval
        self.running = not self._stop_requested
        logger.info(f"Update loop started (interval: {interval}s, device {self.config.identity})")
        ticks = 0
        try:
            while self.running:
                start_tick = self._clock()
                self.tick()
                ticks += 1
                if max_ticks is not None and ticks >= max_ticks:
                    break

                # Sleep remainder; an overrun starts the next tick immediately
                elapsed = self._clock() - start_tick
                delay = max(0.0, interval - elapsed)
                await asyncio.sleep(delay)
        finally:
            self.running = False
            self._stop_requested = False
            self.sessions.close_all()
            logger.info("Update loop stopped")

    def stop(self):
        """Request the loop to end; honoured even if run() has not started yet."""
        self._stop_requested = True
        self.running = False

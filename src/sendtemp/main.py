import asyncio
import logging
import signal
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic_settings import BaseSettings, SettingsConfigDict

from sendtemp.config_loader import config_loader
from sendtemp.exceptions import TransportInitError
from sendtemp.routers.api import router as api_router
from sendtemp.schemas import AppHealthOK
from sendtemp.service_manager import service_manager

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseSettings):
    """Runtime settings. Every field can be overridden with a SENDTEMP_* environment variable."""
    model_config = SettingsConfigDict(env_prefix="SENDTEMP_")

    app_name: str = "SendTemp"
    log_level: str = "INFO"
    # Run against a virtual display and a synthetic sensor instead of real hardware
    emulation_mode: bool = config_loader.get_emulation_mode()
    tick_interval: float = config_loader.get_tick_interval()
    # Optional read-only HTTP status surface
    status_api: bool = config_loader.get_status_api_config().enabled
    host: str = config_loader.get_status_api_config().host
    port: int = config_loader.get_status_api_config().port


settings = Settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Run the update loop for as long as the status API is served."""
    logger.info(
        "Starting update loop in %s mode", "emulation" if settings.emulation_mode else "hardware"
    )
    try:
        await service_manager.start_services(
            emulation=settings.emulation_mode, tick_interval=settings.tick_interval
        )
    except TransportInitError as e:
        logger.error("Failed to start services: %s", e)
        raise

    try:
        yield
    finally:
        logger.info("Stopping update loop")
        await service_manager.stop_services()


app = FastAPI(title=settings.app_name, lifespan=lifespan)


@app.get("/", tags=["meta"])
async def read_root() -> dict[str, str]:
    return {"message": settings.app_name}


@app.get("/health", tags=["meta"], response_model=AppHealthOK)
async def healthcheck() -> AppHealthOK:
    return AppHealthOK(status="ok", app=settings.app_name)


# mount API router under /api
app.include_router(api_router, prefix="/api")


def configure_logging(level: str):
    """Send status lines to stdout."""
    logging.basicConfig(stream=sys.stdout, level=level.upper(), format=LOG_FORMAT)


async def run_headless():
    """Run the update loop in the foreground until SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    scheduler = service_manager.build(
        emulation=settings.emulation_mode, tick_interval=settings.tick_interval
    )
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, scheduler.stop)
        except NotImplementedError:
            # Windows event loops; KeyboardInterrupt still ends the run
            pass
    await service_manager.run_scheduler(scheduler)


def main() -> int:
    configure_logging(settings.log_level)
    logger.info(f"{settings.app_name} - Starting...")
    logger.info("Reading CPU temperature and sending to water cooler display")

    if settings.status_api:
        import uvicorn

        logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
        return 0

    try:
        asyncio.run(run_headless())
    except TransportInitError as e:
        logger.error(f"✗ {e}")
        return 1
    except KeyboardInterrupt:
        logger.info("Interrupted")
    logger.info("Temperature sender stopped")
    return 0


if __name__ == "__main__":
    sys.exit(main())

from fastapi import APIRouter

from sendtemp.schemas import DevicesList, StatusResponse
from sendtemp.status import status_tracker

router = APIRouter(tags=["status"])


@router.get("/status", response_model=StatusResponse)
async def get_status() -> StatusResponse:
    """Latest update loop outcome. Tick 0 means the loop has not run yet."""
    report = status_tracker.last_report
    if report is None:
        return StatusResponse(tick=0, connected=len(status_tracker.connected))

    return StatusResponse(
        tick=report.tick,
        celsius=report.sample.celsius if report.sample.available else None,
        source=report.sample.source,
        frame=report.frame.hex() if report.frame is not None else None,
        candidates=report.candidates,
        connected=len(status_tracker.connected),
        skipped=report.skipped,
    )


@router.get("/devices", response_model=DevicesList)
async def get_devices() -> DevicesList:
    """Paths of the devices with an open session."""
    return DevicesList(list=sorted(status_tracker.connected))

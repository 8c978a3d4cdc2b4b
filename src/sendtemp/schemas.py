from typing import List, Optional
from pydantic import BaseModel


class AppHealthOK(BaseModel):
    status: str
    app: str


class StatusResponse(BaseModel):
    tick: int
    celsius: Optional[float] = None
    source: str = ""
    frame: Optional[str] = None
    candidates: int = 0
    connected: int = 0
    skipped: bool = True


class DevicesList(BaseModel):
    list: List[str]

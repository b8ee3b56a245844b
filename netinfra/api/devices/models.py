# netinfra/api/devices/models.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from ...core.constants import DEFAULT_API_PORT


class DeviceSyncResponse(BaseModel):
    is_online: bool
    device: Dict[str, Any]
    stats: Optional[Dict[str, Any]] = None
    message: str


class ConnectionTestResponse(BaseModel):
    success: bool
    identity: Optional[str] = None
    version: Optional[str] = None
    message: Optional[str] = None


class SyncReportResponse(BaseModel):
    inserted_count: int
    updated_count: int
    skipped_count: int
    total_seen: int


class DeviceStatsResponse(BaseModel):
    id: int
    device_id: int
    cpu_usage: float
    memory_usage: float
    disk_usage: float
    uptime: int
    temperature: Optional[float] = None
    voltage: Optional[float] = None
    board_name: Optional[str] = None
    version: Optional[str] = None
    is_sampled: bool
    recorded_at: datetime


# --- Inventory ---
class DeviceBase(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)
    host: str = Field(..., min_length=1)
    port: int = Field(DEFAULT_API_PORT, ge=1, le=65535)
    username: str = Field(..., min_length=1)


class DeviceCreate(DeviceBase):
    password: str = Field(..., min_length=1)


class DeviceUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: Optional[str] = Field(None, min_length=1)
    type: Optional[str] = Field(None, min_length=1)
    host: Optional[str] = Field(None, min_length=1)
    port: Optional[int] = Field(None, ge=1, le=65535)
    username: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = None  # empty keeps the stored password


class DeviceResponse(DeviceBase):
    id: int
    is_online: bool
    last_sync: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

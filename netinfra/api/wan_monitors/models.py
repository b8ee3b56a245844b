# netinfra/api/wan_monitors/models.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class WanMonitorBase(BaseModel):
    name: str = Field(..., min_length=1)
    host: str = Field(..., min_length=1)
    description: Optional[str] = None
    is_active: bool = True


class WanMonitorCreate(WanMonitorBase):
    pass


class WanMonitorUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    host: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    is_active: Optional[bool] = None


class WanMonitorResponse(WanMonitorBase):
    id: int
    last_ping_time: Optional[datetime] = None
    last_ping_success: Optional[bool] = None
    last_ping_latency: Optional[float] = None
    created_at: datetime
    updated_at: datetime


class PingResponse(BaseModel):
    success: bool
    latency: Optional[float] = None
    error: Optional[str] = None


class PingSweepResult(PingResponse):
    monitor_id: int


class PingSweepResponse(BaseModel):
    total: int
    succeeded: int
    failed: int
    results: List[PingSweepResult]


class PingHistoryResponse(BaseModel):
    id: int
    wan_monitor_id: int
    ping_time: datetime
    success: bool
    latency: Optional[float] = None
    error_message: Optional[str] = None

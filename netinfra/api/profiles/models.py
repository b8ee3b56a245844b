# netinfra/api/profiles/models.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# --- Hotspot ---
class HotspotProfileBase(BaseModel):
    name: str = Field(..., min_length=1)
    rate_limit: Optional[str] = None
    session_timeout: Optional[int] = Field(None, ge=0)  # seconds
    shared_users: int = Field(1, ge=0)  # 0 = unlimited


class HotspotProfileCreate(HotspotProfileBase):
    device_id: int


class HotspotProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    rate_limit: Optional[str] = None
    session_timeout: Optional[int] = Field(None, ge=0)
    shared_users: Optional[int] = Field(None, ge=0)


class HotspotProfileResponse(HotspotProfileBase):
    id: int
    device_id: int
    created_at: datetime


# --- PPPoE ---
class PppoeProfileBase(BaseModel):
    name: str = Field(..., min_length=1)
    local_address: Optional[str] = None
    remote_address: Optional[str] = None
    rate_limit: Optional[str] = None
    session_timeout: Optional[int] = Field(None, ge=0)


class PppoeProfileCreate(PppoeProfileBase):
    device_id: int


class PppoeProfileUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    local_address: Optional[str] = None
    remote_address: Optional[str] = None
    rate_limit: Optional[str] = None
    session_timeout: Optional[int] = Field(None, ge=0)


class PppoeProfileResponse(PppoeProfileBase):
    id: int
    device_id: int
    created_at: datetime

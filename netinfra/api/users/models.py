# netinfra/api/users/models.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# --- Hotspot ---
class HotspotUserBase(BaseModel):
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)
    profile: Optional[str] = None
    comment: Optional[str] = None
    disabled: bool = False


class HotspotUserCreate(HotspotUserBase):
    device_id: int


class HotspotUserUpdate(BaseModel):
    username: Optional[str] = Field(None, min_length=1)
    password: Optional[str] = Field(None, min_length=1)
    profile: Optional[str] = None
    comment: Optional[str] = None
    disabled: Optional[bool] = None


class HotspotUserResponse(HotspotUserBase):
    id: int
    device_id: int
    bytes_in: int
    bytes_out: int
    uptime: int
    created_at: datetime
    updated_at: datetime


# --- PPPoE ---
class PppoeUserBase(HotspotUserBase):
    service: Optional[str] = "pppoe"
    caller_id: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_whatsapp: Optional[str] = None
    service_cost: float = 0.0
    customer_name: Optional[str] = None
    customer_address: Optional[str] = None
    ip_address: Optional[str] = None
    service_package_id: Optional[int] = None


class PppoeUserCreate(PppoeUserBase):
    device_id: int


class PppoeUserUpdate(HotspotUserUpdate):
    service: Optional[str] = None
    caller_id: Optional[str] = None
    contact_name: Optional[str] = None
    contact_phone: Optional[str] = None
    contact_whatsapp: Optional[str] = None
    service_cost: Optional[float] = None
    customer_name: Optional[str] = None
    customer_address: Optional[str] = None
    ip_address: Optional[str] = None
    service_package_id: Optional[int] = None


class PppoeUserResponse(PppoeUserBase):
    id: int
    device_id: int
    bytes_in: int
    bytes_out: int
    uptime: int
    created_at: datetime
    updated_at: datetime


class HotspotWriteResponse(BaseModel):
    account: Optional[HotspotUserResponse] = None
    pushed: bool
    message: Optional[str] = None


class PppoeWriteResponse(BaseModel):
    account: Optional[PppoeUserResponse] = None
    pushed: bool
    message: Optional[str] = None

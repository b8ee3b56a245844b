# netinfra/models/profile.py
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from ..utils.timeutils import utcnow


class HotspotProfile(SQLModel, table=True):
    __tablename__ = "hotspot_profiles"
    __table_args__ = (UniqueConstraint("device_id", "name", name="uq_hotspot_profile_device_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    device_id: int = Field(foreign_key="devices.id", nullable=False, index=True)
    name: str = Field(nullable=False)
    rate_limit: Optional[str] = Field(default=None)  # ej. "5M/5M"
    session_timeout: Optional[int] = Field(default=None)  # seconds
    shared_users: int = Field(default=1)  # 0 = unlimited
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())


class PppoeProfile(SQLModel, table=True):
    __tablename__ = "pppoe_profiles"
    __table_args__ = (UniqueConstraint("device_id", "name", name="uq_pppoe_profile_device_name"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    device_id: int = Field(foreign_key="devices.id", nullable=False, index=True)
    name: str = Field(nullable=False)
    local_address: Optional[str] = Field(default=None)
    remote_address: Optional[str] = Field(default=None)  # usually an IP pool name
    rate_limit: Optional[str] = Field(default=None)
    session_timeout: Optional[int] = Field(default=None)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())

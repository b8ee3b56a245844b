# netinfra/models/account.py
"""
Local copies of the subscriber accounts found on a device.

Both tables share the natural key (device_id, username). PPPoE accounts also
carry customer/contact metadata that only exists locally and is never
overwritten by a sync.
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from ..utils.timeutils import utcnow


class HotspotUser(SQLModel, table=True):
    __tablename__ = "hotspot_users"
    __table_args__ = (UniqueConstraint("device_id", "username", name="uq_hotspot_user_device_username"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    device_id: int = Field(foreign_key="devices.id", nullable=False, index=True)
    username: str = Field(nullable=False)
    password: str = Field(nullable=False)
    profile: Optional[str] = Field(default=None)
    comment: Optional[str] = Field(default=None)
    disabled: bool = Field(default=False)
    bytes_in: int = Field(default=0)
    bytes_out: int = Field(default=0)
    uptime: int = Field(default=0)  # seconds
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())


class PppoeUser(SQLModel, table=True):
    __tablename__ = "pppoe_users"
    __table_args__ = (UniqueConstraint("device_id", "username", name="uq_pppoe_user_device_username"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    device_id: int = Field(foreign_key="devices.id", nullable=False, index=True)
    username: str = Field(nullable=False)
    password: str = Field(nullable=False)
    profile: Optional[str] = Field(default=None)
    service: Optional[str] = Field(default=None)
    caller_id: Optional[str] = Field(default=None)
    comment: Optional[str] = Field(default=None)
    disabled: bool = Field(default=False)
    bytes_in: int = Field(default=0)
    bytes_out: int = Field(default=0)
    uptime: int = Field(default=0)

    # Local-only customer data
    contact_name: Optional[str] = Field(default=None)
    contact_phone: Optional[str] = Field(default=None)
    contact_whatsapp: Optional[str] = Field(default=None)
    service_cost: float = Field(default=0.0)
    customer_name: Optional[str] = Field(default=None)
    customer_address: Optional[str] = Field(default=None)
    ip_address: Optional[str] = Field(default=None)
    service_package_id: Optional[int] = Field(default=None)

    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())

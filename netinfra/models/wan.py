# netinfra/models/wan.py
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ..utils.timeutils import utcnow


class WanMonitor(SQLModel, table=True):
    """
    An upstream host pinged over ICMP.

    The last_ping_* columns stay NULL until the first ping
    (Unchecked -> Reachable / Unreachable).
    """

    __tablename__ = "wan_monitors"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    host: str = Field(nullable=False)
    description: Optional[str] = Field(default=None)
    is_active: bool = Field(default=True)
    last_ping_time: Optional[datetime] = Field(default=None, sa_type=DateTime())
    last_ping_success: Optional[bool] = Field(default=None)
    last_ping_latency: Optional[float] = Field(default=None)  # ms
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())


class WanPingHistory(SQLModel, table=True):
    __tablename__ = "wan_ping_history"

    id: Optional[int] = Field(default=None, primary_key=True)
    wan_monitor_id: int = Field(foreign_key="wan_monitors.id", nullable=False, index=True)
    ping_time: datetime = Field(default_factory=utcnow, sa_type=DateTime(), index=True)
    success: bool = Field(default=False)
    latency: Optional[float] = Field(default=None)
    error_message: Optional[str] = Field(default=None)

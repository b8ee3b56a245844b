from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ..utils.timeutils import utcnow


class DeviceStats(SQLModel, table=True):
    """Point-in-time resource snapshot. Append-only: one row per device sync."""

    __tablename__ = "device_stats"

    id: Optional[int] = Field(default=None, primary_key=True)
    device_id: int = Field(foreign_key="devices.id", nullable=False, index=True)
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    disk_usage: float = 0.0
    uptime: int = 0
    temperature: Optional[float] = None
    voltage: Optional[float] = None
    board_name: Optional[str] = None
    version: Optional[str] = None
    is_sampled: bool = True  # False when synthesized because the device was unreachable
    recorded_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(), index=True)

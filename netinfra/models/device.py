# netinfra/models/device.py
from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from ..core.constants import DEFAULT_API_PORT
from ..utils.timeutils import utcnow


class Device(SQLModel, table=True):
    """
    A managed network device.

    Only devices whose `type` is "MikroTik" are reachable through the RouterOS
    API. `is_online` and `last_sync` are written by the sync/test operations only.
    """

    __tablename__ = "devices"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(nullable=False)
    type: str = Field(nullable=False)
    host: str = Field(nullable=False)
    port: int = Field(default=DEFAULT_API_PORT)
    username: str = Field(nullable=False)
    password: str = Field(nullable=False)  # Fernet-encrypted when ENCRYPTION_KEY is set
    is_online: bool = Field(default=False)
    last_sync: Optional[datetime] = Field(default=None, sa_type=DateTime())
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime())

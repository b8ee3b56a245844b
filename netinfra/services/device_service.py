# netinfra/services/device_service.py
import logging
from typing import Any, Dict, List

from sqlmodel import Session, select

from ..models.account import HotspotUser, PppoeUser
from ..models.device import Device
from ..models.profile import HotspotProfile, PppoeProfile
from ..models.stats import DeviceStats
from ..utils.security import encrypt_data
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)

_DEPENDENT_MODELS = (HotspotUser, PppoeUser, HotspotProfile, PppoeProfile, DeviceStats)


class DeviceService(BaseCRUDService[Device]):
    """Device inventory. Passwords are encrypted before they reach the store."""

    def __init__(self, session: Session):
        super().__init__(session, Device)

    def get_all(self) -> List[Device]:
        return self.session.exec(select(Device).order_by(Device.name)).all()

    def create(self, data: Dict[str, Any]) -> Device:
        data = dict(data)
        data["password"] = encrypt_data(data["password"])
        device = super().create(data)
        logger.info(f"[Devices] Added {device.name} ({device.type}) at {device.host}:{device.port}")
        return device

    def update(self, id: int, data: Dict[str, Any]) -> Device:
        data = dict(data)
        # An empty password on update keeps the stored one
        if data.get("password"):
            data["password"] = encrypt_data(data["password"])
        else:
            data.pop("password", None)
        return super().update(id, data)

    def delete(self, id: int) -> None:
        device = self.get_by_id(id)
        for model in _DEPENDENT_MODELS:
            for row in self.session.exec(select(model).where(model.device_id == id)).all():
                self.session.delete(row)
        self.session.delete(device)
        self.session.commit()
        logger.info(f"[Devices] Removed device {id} and its local accounts, profiles and stats")

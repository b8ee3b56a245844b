# netinfra/services/profile_service.py
"""
Local hotspot / PPPoE profiles. Rows are filled by the profile pulls and may
also be edited here; edits are not pushed to the device.
"""
from typing import Any, Dict, List

from sqlmodel import Session, select

from ..core.constants import ServiceKind
from ..core.exceptions import DeviceNotFoundError
from ..models.device import Device
from ..models.profile import HotspotProfile, PppoeProfile
from .base_service import BaseCRUDService

_MODELS = {ServiceKind.HOTSPOT: HotspotProfile, ServiceKind.PPPOE: PppoeProfile}


class ProfileService(BaseCRUDService):
    def __init__(self, session: Session, kind: ServiceKind):
        super().__init__(session, _MODELS[kind])
        self.kind = kind

    def list_profiles(self, device_id: int) -> List[Any]:
        if self.session.get(Device, device_id) is None:
            raise DeviceNotFoundError(f"Device {device_id} not found")
        statement = select(self.model).where(self.model.device_id == device_id).order_by(self.model.name)
        return self.session.exec(statement).all()

    def create_profile(self, data: Dict[str, Any]) -> Any:
        device_id = data.get("device_id")
        if self.session.get(Device, device_id) is None:
            raise DeviceNotFoundError(f"Device {device_id} not found")
        return self.create(data)

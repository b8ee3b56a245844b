# netinfra/api/dependencies.py
from fastapi import Depends
from sqlmodel import Session

from ..core.constants import ServiceKind
from ..db.engine import get_sync_session
from ..services.account_service import AccountService
from ..services.device_service import DeviceService
from ..services.profile_service import ProfileService
from ..services.router_service import DeviceSyncService
from ..services.sync_service import SyncService
from ..services.wan_monitor_service import WanMonitorService
from ..utils.device_clients.mikrotik.session import RouterOsSession


def get_router_session_factory():
    """Overridden in tests to swap the RouterOS transport."""
    return RouterOsSession


def get_device_sync_service(
    session: Session = Depends(get_sync_session),
    session_factory=Depends(get_router_session_factory),
) -> DeviceSyncService:
    return DeviceSyncService(session, session_factory)


def get_sync_service(
    session: Session = Depends(get_sync_session),
    session_factory=Depends(get_router_session_factory),
) -> SyncService:
    return SyncService(session, session_factory)


def get_hotspot_account_service(
    session: Session = Depends(get_sync_session),
    session_factory=Depends(get_router_session_factory),
) -> AccountService:
    return AccountService(session, ServiceKind.HOTSPOT, session_factory)


def get_pppoe_account_service(
    session: Session = Depends(get_sync_session),
    session_factory=Depends(get_router_session_factory),
) -> AccountService:
    return AccountService(session, ServiceKind.PPPOE, session_factory)


def get_wan_monitor_service(session: Session = Depends(get_sync_session)) -> WanMonitorService:
    return WanMonitorService(session)


def get_device_service(session: Session = Depends(get_sync_session)) -> DeviceService:
    return DeviceService(session)


def get_hotspot_profile_service(session: Session = Depends(get_sync_session)) -> ProfileService:
    return ProfileService(session, ServiceKind.HOTSPOT)


def get_pppoe_profile_service(session: Session = Depends(get_sync_session)) -> ProfileService:
    return ProfileService(session, ServiceKind.PPPOE)

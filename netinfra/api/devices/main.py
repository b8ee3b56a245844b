# netinfra/api/devices/main.py
from typing import Any, Dict, List

from fastapi import APIRouter, Depends, HTTPException, status
from sqlmodel import Session

from ...db.engine import get_sync_session
from ...services.device_service import DeviceService
from ...services.router_service import DeviceSyncService, RouterService, get_mikrotik_device
from ...services.sync_service import SyncService
from ..dependencies import (
    get_device_service,
    get_device_sync_service,
    get_router_session_factory,
    get_sync_service,
)
from .models import (
    ConnectionTestResponse,
    DeviceCreate,
    DeviceResponse,
    DeviceSyncResponse,
    DeviceUpdate,
    SyncReportResponse,
)

router = APIRouter()


# --- Inventory ---


@router.get("/devices", response_model=List[DeviceResponse])
def list_devices(service: DeviceService = Depends(get_device_service)):
    return service.get_all()


@router.post("/devices", response_model=DeviceResponse, status_code=status.HTTP_201_CREATED)
def create_device(data: DeviceCreate, service: DeviceService = Depends(get_device_service)):
    try:
        return service.create(data.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.get("/devices/{device_id}", response_model=DeviceResponse)
def get_device(device_id: int, service: DeviceService = Depends(get_device_service)):
    return service.get_by_id(device_id)


@router.put("/devices/{device_id}", response_model=DeviceResponse)
def update_device(device_id: int, data: DeviceUpdate, service: DeviceService = Depends(get_device_service)):
    try:
        return service.update(device_id, data.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/devices/{device_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_device(device_id: int, service: DeviceService = Depends(get_device_service)):
    service.delete(device_id)
    return


# --- Status ---


@router.post("/devices/{device_id}/sync", response_model=DeviceSyncResponse)
def sync_device(device_id: int, service: DeviceSyncService = Depends(get_device_sync_service)):
    return service.sync_device(device_id)


@router.post("/devices/{device_id}/test", response_model=ConnectionTestResponse)
def test_device_connection(device_id: int, service: DeviceSyncService = Depends(get_device_sync_service)):
    return service.test_device_connection(device_id)


# --- Reconciliation (device -> local store) ---


@router.post("/devices/{device_id}/sync/hotspot-users", response_model=SyncReportResponse)
def pull_hotspot_users(device_id: int, service: SyncService = Depends(get_sync_service)):
    return service.pull_hotspot_users(device_id).as_dict()


@router.post("/devices/{device_id}/sync/pppoe-users", response_model=SyncReportResponse)
def pull_pppoe_users(device_id: int, service: SyncService = Depends(get_sync_service)):
    return service.pull_pppoe_users(device_id).as_dict()


@router.post("/devices/{device_id}/sync/hotspot-profiles", response_model=SyncReportResponse)
def pull_hotspot_profiles(device_id: int, service: SyncService = Depends(get_sync_service)):
    return service.pull_hotspot_profiles(device_id).as_dict()


@router.post("/devices/{device_id}/sync/pppoe-profiles", response_model=SyncReportResponse)
def pull_pppoe_profiles(device_id: int, service: SyncService = Depends(get_sync_service)):
    return service.pull_pppoe_profiles(device_id).as_dict()


# --- Live read-throughs ---


@router.get("/devices/{device_id}/interfaces", response_model=List[Dict[str, Any]])
def get_interfaces(
    device_id: int,
    session: Session = Depends(get_sync_session),
    session_factory=Depends(get_router_session_factory),
):
    device = get_mikrotik_device(session, device_id)
    with RouterService(device, session_factory) as router_service:
        return router_service.adapter.list_interface_stats()


@router.get("/devices/{device_id}/active-sessions", response_model=List[Dict[str, Any]])
def get_active_sessions(
    device_id: int,
    session: Session = Depends(get_sync_session),
    session_factory=Depends(get_router_session_factory),
):
    device = get_mikrotik_device(session, device_id)
    with RouterService(device, session_factory) as router_service:
        return router_service.adapter.list_active_sessions()

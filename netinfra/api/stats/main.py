# netinfra/api/stats/main.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...core.exceptions import DeviceNotFoundError
from ...models.device import Device
from ...services.router_service import DeviceSyncService
from ..devices.models import DeviceStatsResponse
from ..dependencies import get_device_sync_service

router = APIRouter()


def _ensure_device(service: DeviceSyncService, device_id: int) -> None:
    if service.session.get(Device, device_id) is None:
        raise DeviceNotFoundError(f"Device {device_id} not found")


@router.get("/devices/{device_id}/stats", response_model=DeviceStatsResponse)
def get_latest_stats(device_id: int, service: DeviceSyncService = Depends(get_device_sync_service)):
    _ensure_device(service, device_id)
    stats = service.get_latest_stats(device_id)
    if stats is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No stats recorded for this device yet")
    return stats


@router.get("/devices/{device_id}/stats/history", response_model=List[DeviceStatsResponse])
def get_stats_history(
    device_id: int,
    limit: int = Query(100, ge=1, le=1000),
    service: DeviceSyncService = Depends(get_device_sync_service),
):
    _ensure_device(service, device_id)
    return service.get_stats_history(device_id, limit=limit)

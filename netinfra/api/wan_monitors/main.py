# netinfra/api/wan_monitors/main.py
from dataclasses import asdict
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ...services.wan_monitor_service import WanMonitorService
from ..dependencies import get_wan_monitor_service
from .models import (
    PingHistoryResponse,
    PingResponse,
    PingSweepResponse,
    WanMonitorCreate,
    WanMonitorResponse,
    WanMonitorUpdate,
)

router = APIRouter()


@router.get("/wan-monitors", response_model=List[WanMonitorResponse])
def list_wan_monitors(service: WanMonitorService = Depends(get_wan_monitor_service)):
    return service.get_all()


@router.post("/wan-monitors", response_model=WanMonitorResponse, status_code=status.HTTP_201_CREATED)
def create_wan_monitor(data: WanMonitorCreate, service: WanMonitorService = Depends(get_wan_monitor_service)):
    try:
        return service.create(data.model_dump())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# Declared before /{monitor_id} routes so "ping-all" is not parsed as an id
@router.post("/wan-monitors/ping-all", response_model=PingSweepResponse)
def ping_all_wan_monitors(service: WanMonitorService = Depends(get_wan_monitor_service)):
    return asdict(service.ping_all_active_monitors())


@router.put("/wan-monitors/{monitor_id}", response_model=WanMonitorResponse)
def update_wan_monitor(
    monitor_id: int, data: WanMonitorUpdate, service: WanMonitorService = Depends(get_wan_monitor_service)
):
    try:
        return service.update(monitor_id, data.model_dump(exclude_unset=True))
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


@router.delete("/wan-monitors/{monitor_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_wan_monitor(monitor_id: int, service: WanMonitorService = Depends(get_wan_monitor_service)):
    service.delete(monitor_id)
    return


@router.post("/wan-monitors/{monitor_id}/ping", response_model=PingResponse)
def ping_wan_monitor(monitor_id: int, service: WanMonitorService = Depends(get_wan_monitor_service)):
    return asdict(service.ping_monitor(monitor_id))


@router.get("/wan-monitors/{monitor_id}/history", response_model=List[PingHistoryResponse])
def get_wan_monitor_history(
    monitor_id: int,
    hours: int = Query(24, ge=1, le=24 * 30),
    service: WanMonitorService = Depends(get_wan_monitor_service),
):
    return service.get_history(monitor_id, hours=hours)

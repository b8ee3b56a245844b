# netinfra/api/profiles/main.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from ...services.profile_service import ProfileService
from ..dependencies import get_hotspot_profile_service, get_pppoe_profile_service
from .models import (
    HotspotProfileCreate,
    HotspotProfileResponse,
    HotspotProfileUpdate,
    PppoeProfileCreate,
    PppoeProfileResponse,
    PppoeProfileUpdate,
)

router = APIRouter()


def _save(write):
    try:
        return write()
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# --- Hotspot ---


@router.get("/profiles/hotspot/{device_id}", response_model=List[HotspotProfileResponse])
def list_hotspot_profiles(device_id: int, service: ProfileService = Depends(get_hotspot_profile_service)):
    return service.list_profiles(device_id)


@router.post("/profiles/hotspot", response_model=HotspotProfileResponse, status_code=status.HTTP_201_CREATED)
def create_hotspot_profile(data: HotspotProfileCreate, service: ProfileService = Depends(get_hotspot_profile_service)):
    return _save(lambda: service.create_profile(data.model_dump()))


@router.put("/profiles/hotspot/{profile_id}", response_model=HotspotProfileResponse)
def update_hotspot_profile(
    profile_id: int, data: HotspotProfileUpdate, service: ProfileService = Depends(get_hotspot_profile_service)
):
    return _save(lambda: service.update(profile_id, data.model_dump(exclude_unset=True)))


@router.delete("/profiles/hotspot/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_hotspot_profile(profile_id: int, service: ProfileService = Depends(get_hotspot_profile_service)):
    service.delete(profile_id)
    return


# --- PPPoE ---


@router.get("/profiles/pppoe/{device_id}", response_model=List[PppoeProfileResponse])
def list_pppoe_profiles(device_id: int, service: ProfileService = Depends(get_pppoe_profile_service)):
    return service.list_profiles(device_id)


@router.post("/profiles/pppoe", response_model=PppoeProfileResponse, status_code=status.HTTP_201_CREATED)
def create_pppoe_profile(data: PppoeProfileCreate, service: ProfileService = Depends(get_pppoe_profile_service)):
    return _save(lambda: service.create_profile(data.model_dump()))


@router.put("/profiles/pppoe/{profile_id}", response_model=PppoeProfileResponse)
def update_pppoe_profile(
    profile_id: int, data: PppoeProfileUpdate, service: ProfileService = Depends(get_pppoe_profile_service)
):
    return _save(lambda: service.update(profile_id, data.model_dump(exclude_unset=True)))


@router.delete("/profiles/pppoe/{profile_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_pppoe_profile(profile_id: int, service: ProfileService = Depends(get_pppoe_profile_service)):
    service.delete(profile_id)
    return

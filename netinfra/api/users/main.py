# netinfra/api/users/main.py
"""
Hotspot / PPPoE account CRUD. Every write is saved locally first and then
pushed to the device; the response says whether the push succeeded.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status

from ...services.account_service import AccountService, AccountWriteResult
from ..dependencies import get_hotspot_account_service, get_pppoe_account_service
from .models import (
    HotspotUserCreate,
    HotspotUserResponse,
    HotspotUserUpdate,
    HotspotWriteResponse,
    PppoeUserCreate,
    PppoeUserResponse,
    PppoeUserUpdate,
    PppoeWriteResponse,
)

router = APIRouter()


def _as_response(result: AccountWriteResult) -> dict:
    account = result.account.model_dump() if result.account is not None else None
    return {"account": account, "pushed": result.pushed, "message": result.message}


def _run(write):
    try:
        return _as_response(write())
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))


# --- Hotspot ---


@router.get("/users/hotspot", response_model=List[HotspotUserResponse])
def list_hotspot_users(
    device_id: Optional[int] = None, service: AccountService = Depends(get_hotspot_account_service)
):
    return service.list_accounts(device_id)


@router.post("/users/hotspot", response_model=HotspotWriteResponse, status_code=status.HTTP_201_CREATED)
def create_hotspot_user(data: HotspotUserCreate, service: AccountService = Depends(get_hotspot_account_service)):
    return _run(lambda: service.create_account(data.model_dump()))


@router.put("/users/hotspot/{account_id}", response_model=HotspotWriteResponse)
def update_hotspot_user(
    account_id: int, data: HotspotUserUpdate, service: AccountService = Depends(get_hotspot_account_service)
):
    return _run(lambda: service.update_account(account_id, data.model_dump(exclude_unset=True)))


@router.delete("/users/hotspot/{account_id}", response_model=HotspotWriteResponse)
def delete_hotspot_user(account_id: int, service: AccountService = Depends(get_hotspot_account_service)):
    return _run(lambda: service.delete_account(account_id))


# --- PPPoE ---


@router.get("/users/pppoe", response_model=List[PppoeUserResponse])
def list_pppoe_users(device_id: Optional[int] = None, service: AccountService = Depends(get_pppoe_account_service)):
    return service.list_accounts(device_id)


@router.post("/users/pppoe", response_model=PppoeWriteResponse, status_code=status.HTTP_201_CREATED)
def create_pppoe_user(data: PppoeUserCreate, service: AccountService = Depends(get_pppoe_account_service)):
    return _run(lambda: service.create_account(data.model_dump()))


@router.put("/users/pppoe/{account_id}", response_model=PppoeWriteResponse)
def update_pppoe_user(
    account_id: int, data: PppoeUserUpdate, service: AccountService = Depends(get_pppoe_account_service)
):
    return _run(lambda: service.update_account(account_id, data.model_dump(exclude_unset=True)))


@router.delete("/users/pppoe/{account_id}", response_model=PppoeWriteResponse)
def delete_pppoe_user(account_id: int, service: AccountService = Depends(get_pppoe_account_service)):
    return _run(lambda: service.delete_account(account_id))

# netinfra/services/account_service.py
"""
Local CRUD for hotspot / PPPoE accounts with best-effort push to the device.

The local write is committed first. The push that follows may fail (device
offline, rejected command, missing entry); that is logged and reported as
`pushed=False` but never undoes the local change.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from sqlmodel import Session, select

from ..core.constants import DeviceType, ServiceKind
from ..core.exceptions import DeviceNotFoundError, RouterError
from ..models.account import HotspotUser, PppoeUser
from ..models.device import Device
from ..utils.device_clients.adapters.mikrotik_router import MikrotikRouterAdapter
from ..utils.device_clients.adapters.records import account_to_vendor_fields
from ..utils.device_clients.mikrotik.session import RouterOsSession
from .base_service import BaseCRUDService
from .router_service import RouterService

logger = logging.getLogger(__name__)

_MODELS = {ServiceKind.HOTSPOT: HotspotUser, ServiceKind.PPPOE: PppoeUser}


@dataclass
class AccountWriteResult:
    account: Any
    pushed: bool
    message: Optional[str] = None


class AccountService(BaseCRUDService):
    def __init__(
        self,
        session: Session,
        kind: ServiceKind,
        session_factory: Callable[..., RouterOsSession] = RouterOsSession,
    ):
        super().__init__(session, _MODELS[kind])
        self.kind = kind
        self.session_factory = session_factory

    def list_accounts(self, device_id: Optional[int] = None) -> List[Any]:
        statement = select(self.model)
        if device_id is not None:
            statement = statement.where(self.model.device_id == device_id)
        return self.session.exec(statement.order_by(self.model.username)).all()

    def create_account(self, data: Dict[str, Any]) -> AccountWriteResult:
        device_id = data.get("device_id")
        if self.session.get(Device, device_id) is None:
            raise DeviceNotFoundError(f"Device {device_id} not found")

        account = self.create(data)
        fields = self._vendor_fields(account)
        pushed, message = self._push(
            account.device_id,
            lambda adapter: getattr(adapter, f"add_{self.kind.value}_user")(fields),
        )
        return AccountWriteResult(account=account, pushed=pushed, message=message)

    def update_account(self, account_id: int, data: Dict[str, Any]) -> AccountWriteResult:
        original_username = self.get_by_id(account_id).username
        account = self.update(account_id, data)
        fields = self._vendor_fields(account)
        pushed, message = self._push(
            account.device_id,
            lambda adapter: getattr(adapter, f"update_{self.kind.value}_user")(original_username, fields),
        )
        return AccountWriteResult(account=account, pushed=pushed, message=message)

    def delete_account(self, account_id: int) -> AccountWriteResult:
        account = self.get_by_id(account_id)
        device_id, username = account.device_id, account.username
        self.delete(account_id)
        pushed, message = self._push(
            device_id,
            lambda adapter: getattr(adapter, f"remove_{self.kind.value}_user")(username),
        )
        return AccountWriteResult(account=None, pushed=pushed, message=message)

    def _vendor_fields(self, account) -> Dict[str, str]:
        return account_to_vendor_fields(self.kind, account.model_dump())

    def _push(self, device_id: int, action: Callable[[MikrotikRouterAdapter], bool]):
        device = self.session.get(Device, device_id)
        if device is None or device.type != DeviceType.MIKROTIK.value:
            return False, "Device does not support RouterOS integration; saved locally only"

        try:
            with RouterService(device, self.session_factory) as router:
                pushed = action(router.adapter)
        except RouterError as e:
            logger.error(f"[Accounts] Push of {self.kind.value} account to {device.name} failed: {e}")
            return False, f"Saved locally; device update failed: {e}"

        if not pushed:
            logger.warning(f"[Accounts] {device.name} did not apply the {self.kind.value} account change")
            return False, "Saved locally; device rejected the change"
        return True, None

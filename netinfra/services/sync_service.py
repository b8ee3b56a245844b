# netinfra/services/sync_service.py
"""
Device -> local store reconciliation.

Every pull reads one entity list from the device, then upserts each entity by
its natural key (device_id + username/name). Only fields the device owns are
written on update; local-only customer data is never touched. A malformed
entity is skipped and counted, never aborting the batch.
"""
import logging
from dataclasses import asdict, dataclass
from typing import Any, Callable, Dict, List, Optional, Type, Union

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, select

from ..core.config import settings
from ..core.constants import MissingSecretPolicy, ServiceKind
from ..core.exceptions import EntityValidationError
from ..models.account import HotspotUser, PppoeUser
from ..models.device import Device
from ..models.profile import HotspotProfile, PppoeProfile
from ..utils.device_clients.adapters.records import RemoteAccount, RemoteProfile
from ..utils.device_clients.mikrotik.session import RouterOsSession
from ..utils.timeutils import utcnow
from .router_service import RouterService, get_mikrotik_device

logger = logging.getLogger(__name__)

AccountModel = Union[HotspotUser, PppoeUser]
ProfileModel = Union[HotspotProfile, PppoeProfile]

_ACCOUNT_MODELS = {ServiceKind.HOTSPOT: HotspotUser, ServiceKind.PPPOE: PppoeUser}
_PROFILE_MODELS = {ServiceKind.HOTSPOT: HotspotProfile, ServiceKind.PPPOE: PppoeProfile}


@dataclass
class SyncReport:
    inserted_count: int = 0
    updated_count: int = 0
    skipped_count: int = 0
    total_seen: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


class SyncService:
    def __init__(
        self,
        session: Session,
        session_factory: Callable[..., RouterOsSession] = RouterOsSession,
        missing_secret_policy: Optional[str] = None,
        fallback_secret: Optional[str] = None,
    ):
        self.session = session
        self.session_factory = session_factory
        self.missing_secret_policy = MissingSecretPolicy(
            missing_secret_policy or settings.sync_missing_secret_policy
        )
        self.fallback_secret = fallback_secret if fallback_secret is not None else settings.sync_fallback_secret

    # --- Public operations ---

    def pull_hotspot_users(self, device_id: int) -> SyncReport:
        return self._pull_accounts(device_id, ServiceKind.HOTSPOT)

    def pull_pppoe_users(self, device_id: int) -> SyncReport:
        return self._pull_accounts(device_id, ServiceKind.PPPOE)

    def pull_hotspot_profiles(self, device_id: int) -> SyncReport:
        return self._pull_profiles(device_id, ServiceKind.HOTSPOT)

    def pull_pppoe_profiles(self, device_id: int) -> SyncReport:
        return self._pull_profiles(device_id, ServiceKind.PPPOE)

    # --- Internals ---

    def _fetch(self, device: Device, method_name: str) -> List[Dict[str, Any]]:
        # Raises RouterConnectionError before anything local is written
        with RouterService(device, self.session_factory) as router:
            return getattr(router.adapter, method_name)()

    def _pull_accounts(self, device_id: int, kind: ServiceKind) -> SyncReport:
        device = get_mikrotik_device(self.session, device_id)
        rows = self._fetch(device, f"list_{kind.value}_users")
        report = self._reconcile(device, kind, rows, self._upsert_account)
        logger.info(f"[Sync] {kind.value} users from {device.name}: {report.as_dict()}")
        return report

    def _pull_profiles(self, device_id: int, kind: ServiceKind) -> SyncReport:
        device = get_mikrotik_device(self.session, device_id)
        rows = self._fetch(device, f"list_{kind.value}_profiles")
        report = self._reconcile(device, kind, rows, self._upsert_profile)
        logger.info(f"[Sync] {kind.value} profiles from {device.name}: {report.as_dict()}")
        return report

    def _reconcile(self, device: Device, kind: ServiceKind, rows, upsert) -> SyncReport:
        report = SyncReport(total_seen=len(rows))
        device_id = device.id

        for row in rows:
            try:
                inserted = upsert(device_id, kind, row)
                self.session.commit()
            except (EntityValidationError, ValueError, TypeError) as e:
                self.session.rollback()
                report.skipped_count += 1
                logger.warning(f"[Sync] Skipping {kind.value} entity {row.get('.id')}: {e}")
                continue
            except IntegrityError as e:
                self.session.rollback()
                report.skipped_count += 1
                logger.warning(f"[Sync] Store rejected {kind.value} entity {row.get('.id')}: {e.orig}")
                continue

            if inserted:
                report.inserted_count += 1
            else:
                report.updated_count += 1

        device = self.session.get(Device, device_id)
        now = utcnow()
        device.is_online = True
        device.last_sync = now
        device.updated_at = now
        self.session.add(device)
        self.session.commit()
        return report

    def _resolve_secret(self, remote: RemoteAccount, existing: Optional[AccountModel]) -> str:
        if remote.password is not None:
            return remote.password
        if self.missing_secret_policy == MissingSecretPolicy.SKIP:
            raise EntityValidationError(f"Account '{remote.username}' has no secret")
        if existing is not None:
            return existing.password
        logger.warning(f"[Sync] Account '{remote.username}' has no secret; storing placeholder")
        return self.fallback_secret

    def _upsert_account(self, device_id: int, kind: ServiceKind, row: Dict[str, Any]) -> bool:
        """Returns True when a row was inserted, False when updated."""
        model: Type[AccountModel] = _ACCOUNT_MODELS[kind]
        remote = RemoteAccount.from_fields(kind, row)

        existing = self.session.exec(
            select(model).where(model.device_id == device_id, model.username == remote.username)
        ).first()
        password = self._resolve_secret(remote, existing)

        if existing is None:
            record = model(
                device_id=device_id,
                username=remote.username,
                password=password,
                profile=remote.profile,
                comment=remote.comment,
                disabled=remote.disabled,
                bytes_in=remote.bytes_in or 0,
                bytes_out=remote.bytes_out or 0,
                uptime=remote.uptime or 0,
            )
            if kind == ServiceKind.PPPOE:
                record.service = remote.service
                record.caller_id = remote.caller_id
            self.session.add(record)
            return True

        existing.password = password
        existing.profile = remote.profile
        existing.disabled = remote.disabled
        for counter in ("bytes_in", "bytes_out", "uptime"):
            value = getattr(remote, counter)
            if value is not None:
                setattr(existing, counter, value)
        if remote.comment is not None:
            existing.comment = remote.comment
        if kind == ServiceKind.PPPOE:
            if remote.service is not None:
                existing.service = remote.service
            if remote.caller_id is not None:
                existing.caller_id = remote.caller_id
        existing.updated_at = utcnow()
        self.session.add(existing)
        return False

    def _upsert_profile(self, device_id: int, kind: ServiceKind, row: Dict[str, Any]) -> bool:
        model: Type[ProfileModel] = _PROFILE_MODELS[kind]
        remote = RemoteProfile.from_fields(kind, row)

        existing = self.session.exec(
            select(model).where(model.device_id == device_id, model.name == remote.name)
        ).first()
        record = existing or model(device_id=device_id, name=remote.name)

        record.rate_limit = remote.rate_limit
        record.session_timeout = remote.session_timeout
        if kind == ServiceKind.HOTSPOT:
            record.shared_users = remote.shared_users
        else:
            record.local_address = remote.local_address
            record.remote_address = remote.remote_address

        self.session.add(record)
        return existing is None

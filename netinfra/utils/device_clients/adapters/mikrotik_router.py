# netinfra/utils/device_clients/adapters/mikrotik_router.py
import logging
from typing import Any, Callable, Dict, List, Optional

from ....core.constants import ServiceKind
from ....core.exceptions import EntityNotFoundError, RouterError, RouterNotConnectedError
from ..mikrotik import hotspot, interfaces, ppp, system
from ..mikrotik.session import RouterOsSession
from .records import SystemResource, vendor_fields_for

logger = logging.getLogger(__name__)

PPPOE_SERVICES = ("pppoe", "any")


class MikrotikRouterAdapter:
    """
    Query/command surface of a MikroTik router over an open RouterOsSession.

    Reads return the raw vendor field maps (or [] when the command fails);
    writes return True/False. Only a missing session is raised.
    """

    def __init__(self, session: Optional[RouterOsSession]):
        self.session = session

    @property
    def vendor(self) -> str:
        return "mikrotik"

    def _require_session(self) -> RouterOsSession:
        if self.session is None or not self.session.is_connected:
            raise RouterNotConnectedError("MikroTik adapter used without an active session")
        return self.session

    def _list(self, label: str, fetch: Callable) -> List[Dict[str, Any]]:
        session = self._require_session()
        try:
            return fetch(session)
        except RouterError as e:
            logger.error(f"[MikroTik] Error listing {label} on {session.host}: {e}")
            return []

    def _write(self, action: str, call: Callable) -> bool:
        session = self._require_session()
        try:
            call(session)
            return True
        except EntityNotFoundError as e:
            logger.warning(f"[MikroTik] {action} on {session.host}: {e}")
            return False
        except RouterError as e:
            logger.error(f"[MikroTik] {action} failed on {session.host}: {e}")
            return False

    @staticmethod
    def _filter_fields(kind: ServiceKind, fields: Dict[str, Any]) -> Dict[str, Any]:
        allowed = vendor_fields_for(kind)
        return {key: value for key, value in fields.items() if key in allowed and value is not None}

    # --- System ---

    def test_connection(self) -> Dict[str, Any]:
        session = self._require_session()
        try:
            identity = system.get_identity(session)
            resource = system.get_system_resources(session)
            return {"success": True, "identity": identity, "version": resource.get("version")}
        except RouterError as e:
            logger.warning(f"[MikroTik] Connection test failed on {session.host}: {e}")
            return {"success": False, "message": str(e)}

    def get_system_resource(self) -> Optional[SystemResource]:
        session = self._require_session()
        try:
            resource = system.get_system_resources(session)
        except RouterError as e:
            logger.error(f"[MikroTik] Error reading system resources on {session.host}: {e}")
            return None
        if not resource:
            return None

        try:
            health = system.get_health(session)
        except RouterError as e:
            # Not every board has health sensors
            logger.debug(f"[MikroTik] No health data on {session.host}: {e}")
            health = {}
        return SystemResource.from_fields(resource, health)

    # --- Profiles and accounts ---

    def list_hotspot_profiles(self) -> List[Dict[str, Any]]:
        return self._list("hotspot profiles", hotspot.get_hotspot_profiles)

    def list_pppoe_profiles(self) -> List[Dict[str, Any]]:
        return self._list("PPP profiles", ppp.get_ppp_profiles)

    def list_hotspot_users(self) -> List[Dict[str, Any]]:
        return self._list("hotspot users", hotspot.get_hotspot_users)

    def list_pppoe_users(self) -> List[Dict[str, Any]]:
        secrets = self._list("PPP secrets", ppp.get_ppp_secrets)
        # Secrets bound to other PPP services (pptp, l2tp, ...) are not PPPoE accounts
        return [row for row in secrets if row.get("service", "any") in PPPOE_SERVICES]

    def list_interface_stats(self) -> List[Dict[str, Any]]:
        return self._list("interfaces", interfaces.get_interfaces)

    def list_active_sessions(self) -> List[Dict[str, Any]]:
        hotspot_active = self._list("hotspot active sessions", hotspot.get_hotspot_active)
        ppp_active = self._list("PPP active sessions", ppp.get_ppp_active)
        return [{**row, "type": ServiceKind.HOTSPOT.value} for row in hotspot_active] + [
            {**row, "type": ServiceKind.PPPOE.value} for row in ppp_active
        ]

    def add_hotspot_user(self, fields: Dict[str, Any]) -> bool:
        params = self._filter_fields(ServiceKind.HOTSPOT, fields)
        return self._write(
            f"Add hotspot user '{params.get('name')}'",
            lambda session: hotspot.add_hotspot_user(session, params),
        )

    def update_hotspot_user(self, username: str, fields: Dict[str, Any]) -> bool:
        params = self._filter_fields(ServiceKind.HOTSPOT, fields)
        return self._write(
            f"Update hotspot user '{username}'",
            lambda session: hotspot.update_hotspot_user(session, username, params),
        )

    def remove_hotspot_user(self, username: str) -> bool:
        return self._write(
            f"Remove hotspot user '{username}'",
            lambda session: hotspot.remove_hotspot_user(session, username),
        )

    def add_pppoe_user(self, fields: Dict[str, Any]) -> bool:
        params = self._filter_fields(ServiceKind.PPPOE, fields)
        return self._write(
            f"Add PPPoE secret '{params.get('name')}'",
            lambda session: ppp.add_ppp_secret(session, params),
        )

    def update_pppoe_user(self, username: str, fields: Dict[str, Any]) -> bool:
        params = self._filter_fields(ServiceKind.PPPOE, fields)
        return self._write(
            f"Update PPPoE secret '{username}'",
            lambda session: ppp.update_ppp_secret(session, username, params),
        )

    def remove_pppoe_user(self, username: str) -> bool:
        return self._write(
            f"Remove PPPoE secret '{username}'",
            lambda session: ppp.remove_ppp_secret(session, username),
        )

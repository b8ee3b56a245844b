# netinfra/services/router_service.py
import logging
from typing import Any, Callable, Dict, Optional

from sqlmodel import Session, select

from ..core.config import settings
from ..core.constants import DeviceType
from ..core.exceptions import DeviceNotFoundError, RouterConnectionError, UnsupportedDeviceError
from ..models.device import Device
from ..models.stats import DeviceStats
from ..utils.device_clients.adapters.mikrotik_router import MikrotikRouterAdapter
from ..utils.device_clients.adapters.records import SystemResource
from ..utils.device_clients.mikrotik.session import RouterOsSession
from ..utils.security import decrypt_data
from ..utils.timeutils import utcnow

logger = logging.getLogger(__name__)

SessionFactory = Callable[..., RouterOsSession]


def get_mikrotik_device(session: Session, device_id: int) -> Device:
    """
    Loads a device that can be driven over the RouterOS API.
    Raises DeviceNotFoundError / UnsupportedDeviceError.
    """
    device = session.get(Device, device_id)
    if device is None:
        raise DeviceNotFoundError(f"Device {device_id} not found")
    if device.type != DeviceType.MIKROTIK.value:
        raise UnsupportedDeviceError(f"Device {device.name} ({device.type}) does not support RouterOS integration")
    return device


class RouterService:
    """
    One fresh RouterOS session against a stored device.

    Usage:
        with RouterService(device) as router:
            router.adapter.list_hotspot_users()
    """

    def __init__(self, device: Device, session_factory: SessionFactory = RouterOsSession):
        if device is None:
            raise DeviceNotFoundError("Device not found")
        if device.type != DeviceType.MIKROTIK.value:
            raise UnsupportedDeviceError(f"Device {device.name} ({device.type}) does not support RouterOS integration")

        self.device = device
        self._session = session_factory(
            host=device.host,
            port=device.port,
            username=device.username,
            password=decrypt_data(device.password),
            timeout=settings.router_connect_timeout,
            use_ssl=settings.router_use_ssl,
        )
        self.adapter = MikrotikRouterAdapter(self._session)

    def connect(self) -> "RouterService":
        self._session.connect()
        return self

    def disconnect(self) -> None:
        self._session.disconnect()

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()


def _device_payload(device: Device) -> Dict[str, Any]:
    return device.model_dump(exclude={"password"})


class DeviceSyncService:
    """Connectivity test and resource sampling for a single device."""

    def __init__(self, session: Session, session_factory: SessionFactory = RouterOsSession):
        self.session = session
        self.session_factory = session_factory

    def _check_device(self, device: Device, with_resources: bool):
        try:
            with RouterService(device, self.session_factory) as router:
                result = router.adapter.test_connection()
                resource = None
                if with_resources and result.get("success"):
                    resource = router.adapter.get_system_resource()
                return result, resource
        except RouterConnectionError as e:
            logger.warning(f"[DeviceSync] {device.name} ({device.host}) unreachable: {e}")
            return {"success": False, "message": str(e)}, None

    def test_device_connection(self, device_id: int) -> Dict[str, Any]:
        device = get_mikrotik_device(self.session, device_id)
        result, _ = self._check_device(device, with_resources=False)

        device.is_online = bool(result.get("success"))
        device.updated_at = utcnow()
        self.session.add(device)
        self.session.commit()
        return result

    def sync_device(self, device_id: int) -> Dict[str, Any]:
        """
        Tests the device, samples its resources and appends exactly one
        device_stats row. Unreachable devices are reported, not raised.
        """
        device = get_mikrotik_device(self.session, device_id)
        result, resource = self._check_device(device, with_resources=True)
        is_online = bool(result.get("success"))

        stats = self._build_stats(device, resource)
        now = utcnow()
        device.is_online = is_online
        device.updated_at = now
        if is_online:
            device.last_sync = now

        self.session.add(stats)
        self.session.add(device)
        self.session.commit()
        self.session.refresh(stats)
        self.session.refresh(device)

        if is_online:
            message = f"Device {device.name} synced"
            if not stats.is_sampled:
                message += " (system resources unavailable)"
        else:
            message = result.get("message") or f"Device {device.name} is offline"
        logger.info(f"[DeviceSync] {device.name}: online={is_online}")

        return {
            "is_online": is_online,
            "device": _device_payload(device),
            "stats": stats.model_dump(),
            "message": message,
        }

    def get_latest_stats(self, device_id: int) -> Optional[DeviceStats]:
        statement = (
            select(DeviceStats)
            .where(DeviceStats.device_id == device_id)
            .order_by(DeviceStats.recorded_at.desc(), DeviceStats.id.desc())
        )
        return self.session.exec(statement).first()

    def get_stats_history(self, device_id: int, limit: int = 100):
        statement = (
            select(DeviceStats)
            .where(DeviceStats.device_id == device_id)
            .order_by(DeviceStats.recorded_at.desc(), DeviceStats.id.desc())
            .limit(limit)
        )
        return self.session.exec(statement).all()

    @staticmethod
    def _build_stats(device: Device, resource: Optional[SystemResource]) -> DeviceStats:
        if resource is None:
            # Zeroed snapshot, flagged as not sampled
            return DeviceStats(device_id=device.id, is_sampled=False)
        return DeviceStats(
            device_id=device.id,
            cpu_usage=resource.cpu_load_percent,
            memory_usage=resource.memory_usage_percent,
            disk_usage=resource.disk_usage_percent,
            uptime=resource.uptime_seconds,
            temperature=resource.temperature,
            voltage=resource.voltage,
            board_name=resource.board_name,
            version=resource.version,
            is_sampled=True,
        )

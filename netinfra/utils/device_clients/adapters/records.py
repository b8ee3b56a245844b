# netinfra/utils/device_clients/adapters/records.py
"""
Vendor-agnostic records built from raw RouterOS field maps.

Each `from_fields()` takes the dict a print command returns (vendor keys such
as "caller-id" or "bytes-in") and produces a typed record, raising
EntityValidationError when the entity cannot be stored.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ....core.constants import UNLIMITED_SHARED_USERS, ServiceKind
from ....core.exceptions import EntityValidationError
from ..mikrotik.parsers import format_bool, parse_bool, parse_bytes, parse_duration, parse_float, parse_int


def _text(fields: Dict[str, Any], key: str) -> Optional[str]:
    value = fields.get(key)
    if value is None:
        return None
    value = str(value)
    return value if value.strip() else None


@dataclass
class RemoteAccount:
    """A hotspot user or a PPPoE secret as the device reports it."""

    kind: ServiceKind
    username: str
    password: Optional[str] = None
    profile: Optional[str] = None
    comment: Optional[str] = None
    disabled: bool = False
    service: Optional[str] = None
    caller_id: Optional[str] = None
    # Counters are None when the device did not report them
    bytes_in: Optional[int] = None
    bytes_out: Optional[int] = None
    uptime: Optional[int] = None

    @classmethod
    def from_fields(cls, kind: ServiceKind, fields: Dict[str, Any]) -> "RemoteAccount":
        username = _text(fields, "name")
        if not username or not username.strip():
            raise EntityValidationError(f"{kind.value} account without a name: {fields.get('.id')}")

        account = cls(
            kind=kind,
            username=username.strip(),
            password=_text(fields, "password"),
            profile=_text(fields, "profile"),
            comment=_text(fields, "comment"),
            disabled=parse_bool(fields.get("disabled", "false")),
        )
        if "bytes-in" in fields:
            account.bytes_in = parse_bytes(fields["bytes-in"])
        if "bytes-out" in fields:
            account.bytes_out = parse_bytes(fields["bytes-out"])
        if "uptime" in fields:
            account.uptime = parse_duration(fields["uptime"])

        if kind == ServiceKind.PPPOE:
            account.service = _text(fields, "service")
            account.caller_id = _text(fields, "caller-id")
        return account


def _shared_users(value: Optional[str]) -> int:
    if value is not None and str(value).strip().lower() == "unlimited":
        return UNLIMITED_SHARED_USERS
    return parse_int(value) or 1


@dataclass
class RemoteProfile:
    kind: ServiceKind
    name: str
    rate_limit: Optional[str] = None
    session_timeout: Optional[int] = None
    shared_users: int = 1
    local_address: Optional[str] = None
    remote_address: Optional[str] = None

    @classmethod
    def from_fields(cls, kind: ServiceKind, fields: Dict[str, Any]) -> "RemoteProfile":
        name = _text(fields, "name")
        if not name:
            raise EntityValidationError(f"{kind.value} profile without a name: {fields.get('.id')}")

        timeout = _text(fields, "session-timeout")
        profile = cls(
            kind=kind,
            name=name.strip(),
            rate_limit=_text(fields, "rate-limit"),
            session_timeout=parse_duration(timeout) if timeout else None,
        )
        if kind == ServiceKind.HOTSPOT:
            profile.shared_users = _shared_users(fields.get("shared-users"))
        else:
            profile.local_address = _text(fields, "local-address")
            profile.remote_address = _text(fields, "remote-address")
        return profile


@dataclass
class SystemResource:
    cpu_load_percent: float = 0.0
    total_memory: int = 0
    free_memory: int = 0
    total_disk: int = 0
    free_disk: int = 0
    uptime_seconds: int = 0
    board_name: Optional[str] = None
    version: Optional[str] = None
    temperature: Optional[float] = None
    voltage: Optional[float] = None

    @classmethod
    def from_fields(cls, fields: Dict[str, Any], health: Optional[Dict[str, Any]] = None) -> "SystemResource":
        health = health or {}
        return cls(
            cpu_load_percent=parse_float(fields.get("cpu-load")) or 0.0,
            total_memory=parse_bytes(fields.get("total-memory")),
            free_memory=parse_bytes(fields.get("free-memory")),
            total_disk=parse_bytes(fields.get("total-hdd-space")),
            free_disk=parse_bytes(fields.get("free-hdd-space")),
            uptime_seconds=parse_duration(fields.get("uptime")),
            board_name=_text(fields, "board-name"),
            version=_text(fields, "version"),
            temperature=parse_float(health.get("temperature")),
            voltage=parse_float(health.get("voltage")),
        )

    @property
    def memory_usage_percent(self) -> float:
        if not self.total_memory:
            return 0.0
        return round((self.total_memory - self.free_memory) * 100.0 / self.total_memory, 2)

    @property
    def disk_usage_percent(self) -> float:
        if not self.total_disk:
            return 0.0
        return round((self.total_disk - self.free_disk) * 100.0 / self.total_disk, 2)


@dataclass
class InterfaceStats:
    name: str
    type: Optional[str] = None
    running: bool = False
    disabled: bool = False
    rx_byte: int = 0
    tx_byte: int = 0
    rx_packet: int = 0
    tx_packet: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_fields(cls, fields: Dict[str, Any]) -> "InterfaceStats":
        name = _text(fields, "name")
        if not name:
            raise EntityValidationError("Interface without a name")
        return cls(
            name=name,
            type=_text(fields, "type"),
            running=parse_bool(fields.get("running", "false")),
            disabled=parse_bool(fields.get("disabled", "false")),
            rx_byte=parse_bytes(fields.get("rx-byte")),
            tx_byte=parse_bytes(fields.get("tx-byte")),
            rx_packet=parse_int(fields.get("rx-packet")) or 0,
            tx_packet=parse_int(fields.get("tx-packet")) or 0,
            extra={"mac_address": fields.get("mac-address"), "mtu": fields.get("mtu")},
        )


HOTSPOT_VENDOR_FIELDS = ("name", "password", "profile", "comment", "disabled")
PPPOE_VENDOR_FIELDS = HOTSPOT_VENDOR_FIELDS + ("service", "caller-id")

_LOCAL_TO_VENDOR = {"username": "name", "caller_id": "caller-id"}


def vendor_fields_for(kind: ServiceKind) -> tuple:
    return PPPOE_VENDOR_FIELDS if kind == ServiceKind.PPPOE else HOTSPOT_VENDOR_FIELDS


def account_to_vendor_fields(kind: ServiceKind, account: Dict[str, Any]) -> Dict[str, str]:
    """
    Translates local account fields to the vendor names the device accepts.
    Fields the kind does not support and None values are dropped.
    """
    allowed = vendor_fields_for(kind)
    result: Dict[str, str] = {}
    for key, value in account.items():
        vendor_key = _LOCAL_TO_VENDOR.get(key, key)
        if vendor_key not in allowed or value is None:
            continue
        if vendor_key == "disabled":
            value = format_bool(bool(value))
        result[vendor_key] = str(value)
    return result

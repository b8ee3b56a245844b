"""
Shared enums and constants for devices, services and WAN monitoring.
"""

from enum import Enum, unique


@unique
class DeviceType(str, Enum):
    """Device type tags. Only MIKROTIK triggers RouterOS API integration."""

    MIKROTIK = "MikroTik"


@unique
class ServiceKind(str, Enum):
    """Subscriber service kinds handled by the sync layer."""

    HOTSPOT = "hotspot"
    PPPOE = "pppoe"


@unique
class MissingSecretPolicy(str, Enum):
    """What to do with a remote account that has no password."""

    PLACEHOLDER = "placeholder"
    SKIP = "skip"


DEFAULT_API_PORT = 8728
DEFAULT_API_SSL_PORT = 8729

UNLIMITED_SHARED_USERS = 0

PING_FAILED_MESSAGE = "Ping failed or timed out"

DEFAULT_WAN_MONITORS = (
    {"name": "Google DNS", "host": "8.8.8.8", "description": "Google Public DNS Server"},
    {"name": "Cloudflare DNS", "host": "1.1.1.1", "description": "Cloudflare Public DNS Server"},
)

from .account import HotspotUser, PppoeUser
from .device import Device
from .profile import HotspotProfile, PppoeProfile
from .stats import DeviceStats
from .wan import WanMonitor, WanPingHistory

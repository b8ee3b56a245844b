# netinfra/utils/device_clients/mikrotik/parsers.py
"""
Centralized parsing utilities for MikroTik data.

These functions convert RouterOS-formatted strings into Python-native types
for consistent handling across the adapter, the sync service and the stats.
"""

import re
from typing import Optional

_DURATION_RE = re.compile(
    r"^(?:(?P<w>\d+)w)?(?:(?P<d>\d+)d)?(?:(?P<h>\d+)h)?(?:(?P<m>\d+)m)?(?:(?P<s>\d+)s)?$"
)
_DURATION_UNITS = {"w": 7 * 86400, "d": 86400, "h": 3600, "m": 60, "s": 1}

_BYTES_RE = re.compile(r"^(\d+(?:\.\d+)?)\s*([KMGT]?i?B?)$", re.IGNORECASE)
_BYTE_MULTIPLIERS = {
    "": 1,
    "B": 1,
    "K": 1024,
    "M": 1024**2,
    "G": 1024**3,
    "T": 1024**4,
    "KB": 1024,
    "KIB": 1024,
    "MB": 1024**2,
    "MIB": 1024**2,
    "GB": 1024**3,
    "GIB": 1024**3,
    "TB": 1024**4,
    "TIB": 1024**4,
}


def parse_duration(duration_str: Optional[str]) -> int:
    """
    Parse a RouterOS compact duration string to seconds.

    Examples:
        "2d3h4m5s" -> 183845
        "45s" -> 45
        "1w2d" -> 777600
        "" -> 0

    Only the units present contribute. Anything that does not match the
    compact format (including None) parses to 0.
    """
    if not duration_str:
        return 0

    match = _DURATION_RE.match(str(duration_str).strip())
    if not match:
        return 0

    return sum(int(value) * _DURATION_UNITS[unit] for unit, value in match.groupdict().items() if value)


def parse_bytes(bytes_str: Optional[str]) -> int:
    """
    Parse a byte count that may carry a binary unit suffix.

    Examples:
        "1048576" -> 1048576
        "10MiB" -> 10485760
        "1.5KiB" -> 1536
    """
    if bytes_str is None or bytes_str == "":
        return 0
    text = str(bytes_str).strip()
    match = _BYTES_RE.match(text)
    if not match:
        return parse_int(text) or 0
    value = float(match.group(1))
    multiplier = _BYTE_MULTIPLIERS.get(match.group(2).upper(), 1)
    return int(value * multiplier)


def parse_int(value: Optional[str]) -> Optional[int]:
    """
    Safely parse an integer from string.

    Returns None if unparseable.
    """
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        return None


def parse_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    try:
        return float(value)
    except (ValueError, TypeError):
        return None


def parse_bool(value: Optional[str]) -> bool:
    """RouterOS reports flags as "true"/"false" (API) or "yes"/"no" (CLI)."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "yes")


def format_bool(value: bool) -> str:
    """Inverse of parse_bool, in the form RouterOS accepts on set/add."""
    return "yes" if value else "no"

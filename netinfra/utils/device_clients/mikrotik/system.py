from typing import Any, Dict, Optional


def get_identity(session) -> Optional[str]:
    rows = session.execute("/system/identity/print")
    return rows[0].get("name") if rows else None


def get_system_resources(session) -> Dict[str, Any]:
    rows = session.execute("/system/resource/print")
    return rows[0] if rows else {}


def get_health(session) -> Dict[str, str]:
    """
    Flattens /system/health into {"temperature": ..., "voltage": ...}.

    RouterOS 7 returns one row per sensor (name/value); v6 a single row with
    one column per sensor.
    """
    rows = session.execute("/system/health/print")
    health: Dict[str, str] = {}
    for row in rows:
        if "name" in row and "value" in row:
            health[row["name"]] = row["value"]
        else:
            health.update(row)
    return health

from typing import Any, Dict, List


def get_interfaces(session) -> List[Dict[str, Any]]:
    """Interface list including the rx/tx byte and packet counters."""
    return session.execute("/interface/print", params={"stats": ""})

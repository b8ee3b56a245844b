from typing import Any, Dict, Optional

from ....core.exceptions import EntityNotFoundError


def row_id(row: Dict[str, Any]) -> Optional[str]:
    """Returns the internal RouterOS id (`.id`) of a reply row."""
    return row.get(".id") or row.get("id")


def find_resource_id(session, path: str, **filters) -> Optional[str]:
    """
    Finds the `.id` of the first entry under `path` matching every filter
    exactly (`?key=value` queries). Returns None when nothing matches.
    """
    rows = session.execute(f"{path}/print", queries=filters)
    return row_id(rows[0]) if rows else None


def require_resource_id(session, path: str, label: str, name: str) -> str:
    resource_id = find_resource_id(session, path, name=name)
    if not resource_id:
        raise EntityNotFoundError(f"{label} '{name}' not found")
    return resource_id

from typing import Any, Dict, List

from .base import require_resource_id

USER_PATH = "/ip/hotspot/user"
PROFILE_PATH = "/ip/hotspot/user/profile"
ACTIVE_PATH = "/ip/hotspot/active"


def get_hotspot_users(session) -> List[Dict[str, Any]]:
    return session.execute(f"{USER_PATH}/print")


def get_hotspot_profiles(session) -> List[Dict[str, Any]]:
    return session.execute(f"{PROFILE_PATH}/print")


def get_hotspot_active(session) -> List[Dict[str, Any]]:
    return session.execute(f"{ACTIVE_PATH}/print")


def add_hotspot_user(session, fields: Dict[str, Any]) -> None:
    session.execute(f"{USER_PATH}/add", params=fields)


def update_hotspot_user(session, username: str, fields: Dict[str, Any]) -> None:
    user_id = require_resource_id(session, USER_PATH, "Hotspot user", username)
    session.execute(f"{USER_PATH}/set", params={".id": user_id, **fields})


def remove_hotspot_user(session, username: str) -> None:
    user_id = require_resource_id(session, USER_PATH, "Hotspot user", username)
    session.execute(f"{USER_PATH}/remove", params={".id": user_id})

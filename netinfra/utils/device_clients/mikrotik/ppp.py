from typing import Any, Dict, List

from .base import require_resource_id

SECRET_PATH = "/ppp/secret"
PROFILE_PATH = "/ppp/profile"
ACTIVE_PATH = "/ppp/active"


def get_ppp_secrets(session) -> List[Dict[str, Any]]:
    return session.execute(f"{SECRET_PATH}/print")


def get_ppp_profiles(session) -> List[Dict[str, Any]]:
    return session.execute(f"{PROFILE_PATH}/print")


def get_ppp_active(session) -> List[Dict[str, Any]]:
    return session.execute(f"{ACTIVE_PATH}/print")


def add_ppp_secret(session, fields: Dict[str, Any]) -> None:
    params = {"service": "pppoe", **fields}
    session.execute(f"{SECRET_PATH}/add", params=params)


def update_ppp_secret(session, username: str, fields: Dict[str, Any]) -> None:
    secret_id = require_resource_id(session, SECRET_PATH, "PPP secret", username)
    session.execute(f"{SECRET_PATH}/set", params={".id": secret_id, **fields})


def remove_ppp_secret(session, username: str) -> None:
    secret_id = require_resource_id(session, SECRET_PATH, "PPP secret", username)
    session.execute(f"{SECRET_PATH}/remove", params={".id": secret_id})

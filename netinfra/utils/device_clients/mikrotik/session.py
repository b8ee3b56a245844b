# netinfra/utils/device_clients/mikrotik/session.py
"""
One authenticated RouterOS API session.

Wraps a private `RouterOsApiPool` (never shared, never cached) so that every
operation opens its own connection and closes it on exit. Errors from the
library are classified into RouterConnectionError / RouterCommandError.
"""

import logging
import socket
import ssl
from typing import Any, Dict, List, Optional

from routeros_api import RouterOsApiPool
from routeros_api.exceptions import (
    RouterOsApiCommunicationError,
    RouterOsApiConnectionError,
    RouterOsApiError,
)

from ....core.constants import DEFAULT_API_PORT
from ....core.exceptions import (
    RouterCommandError,
    RouterConnectionError,
    RouterNotConnectedError,
)

logger = logging.getLogger(__name__)


def split_command(command: str) -> tuple:
    """'/ip/hotspot/user/print' -> ('/ip/hotspot/user', 'print')"""
    path, _, verb = command.strip().rstrip("/").rpartition("/")
    if not verb:
        raise RouterCommandError(f"Invalid RouterOS command: {command!r}")
    return path or "/", verb


class RouterOsSession:
    """
    Usage:
        with RouterOsSession(host, port, username, password) as session:
            rows = session.execute("/system/resource/print")
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_API_PORT,
        username: str = "admin",
        password: str = "",
        timeout: float = 10.0,
        use_ssl: bool = False,
    ):
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout
        self.use_ssl = use_ssl
        self._pool: Optional[RouterOsApiPool] = None
        self._api = None

    @property
    def is_connected(self) -> bool:
        return self._api is not None

    def _create_pool(self) -> RouterOsApiPool:
        ssl_context = None
        if self.use_ssl:
            ssl_context = ssl.create_default_context()
            ssl_context.check_hostname = False
            ssl_context.verify_mode = ssl.CERT_NONE

        pool = RouterOsApiPool(
            self.host,
            username=self.username,
            password=self.password,
            port=self.port,
            use_ssl=self.use_ssl,
            ssl_context=ssl_context,
            plaintext_login=True,
        )
        pool.socket_timeout = self.timeout
        return pool

    def connect(self) -> "RouterOsSession":
        """
        Opens and authenticates the session.
        Unreachable host, timeout and rejected credentials all raise
        RouterConnectionError.
        """
        if self._api is not None:
            return self

        logger.info(f"[RouterOS] Connecting to {self.host}:{self.port}...")
        pool = self._create_pool()
        try:
            self._api = pool.get_api()
        except (RouterOsApiError, OSError, socket.timeout) as e:
            self._close_pool(pool)
            logger.error(f"[RouterOS] Failed to connect to {self.host}:{self.port}: {e}")
            raise RouterConnectionError(f"Failed to connect to {self.host}:{self.port}: {e}") from e

        self._pool = pool
        logger.info(f"[RouterOS] Connected to {self.host}")
        return self

    def execute(
        self,
        command: str,
        params: Optional[Dict[str, Any]] = None,
        queries: Optional[Dict[str, Any]] = None,
    ) -> List[Dict[str, str]]:
        """
        Runs one command and returns its reply sentences as flat dicts.

        `params` are sent as `=key=value` words and `queries` as `?key=value`
        filter words.
        """
        if self._api is None:
            raise RouterNotConnectedError(f"Not connected to {self.host}")

        path, verb = split_command(command)
        arguments = {key: _to_word(value) for key, value in (params or {}).items()}
        filters = {key: _to_word(value) for key, value in (queries or {}).items()}

        try:
            rows = self._api.get_resource(path).call(verb, arguments, filters)
        except RouterOsApiCommunicationError as e:
            raise RouterCommandError(f"{command} rejected by {self.host}: {e}") from e
        except (RouterOsApiConnectionError, OSError, socket.timeout) as e:
            raise RouterConnectionError(f"Connection to {self.host} lost during {command}: {e}") from e
        except RouterOsApiError as e:
            raise RouterCommandError(f"{command} failed on {self.host}: {e}") from e

        return [dict(row) for row in rows or []]

    def disconnect(self) -> None:
        """Idempotent. Never raises."""
        pool, self._pool, self._api = self._pool, None, None
        if pool is not None:
            self._close_pool(pool)
            logger.debug(f"[RouterOS] Disconnected from {self.host}")

    def _close_pool(self, pool: RouterOsApiPool) -> None:
        try:
            pool.disconnect()
        except Exception as e:
            logger.debug(f"[RouterOS] Ignoring error while closing {self.host}: {e}")

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
        return False


def _to_word(value: Any) -> str:
    if isinstance(value, bool):
        return "yes" if value else "no"
    return str(value)

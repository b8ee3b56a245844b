import os

# Must be set before netinfra is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["WAN_SCHEDULER_ENABLED"] = "false"
os.environ["APP_ENV"] = "test"
os.environ.pop("ENCRYPTION_KEY", None)

import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, create_engine

from netinfra.core.exceptions import RouterConnectionError, RouterNotConnectedError
from netinfra.db.engine import create_sync_db_and_tables
from netinfra.models.device import Device


class FakeRouter:
    """
    Canned RouterOS device. `responses` maps a full command path to the rows
    it returns; `errors` maps a command to the exception it raises.
    Every executed command is recorded in `calls` as (command, params, queries).
    """

    def __init__(self, responses=None, errors=None, fail_connect=False):
        self.responses = responses or {}
        self.errors = errors or {}
        self.fail_connect = fail_connect
        self.calls = []
        self.sessions = []

    def session_factory(self, **kwargs):
        session = FakeRouterOsSession(self, **kwargs)
        self.sessions.append(session)
        return session

    @property
    def commands(self):
        return [call[0] for call in self.calls]


class FakeRouterOsSession:
    def __init__(self, router, host, port=8728, username="admin", password="", timeout=10, use_ssl=False):
        self.router = router
        self.host = host
        self.port = port
        self.username = username
        self.password = password
        self.timeout = timeout
        self.use_ssl = use_ssl
        self._connected = False
        self.closed = False

    @property
    def is_connected(self):
        return self._connected

    def connect(self):
        if self.router.fail_connect:
            raise RouterConnectionError(f"Failed to connect to {self.host}:{self.port}: timed out")
        self._connected = True
        return self

    def execute(self, command, params=None, queries=None):
        if not self._connected:
            raise RouterNotConnectedError(f"Not connected to {self.host}")
        self.router.calls.append((command, dict(params or {}), dict(queries or {})))
        if command in self.router.errors:
            raise self.router.errors[command]
        rows = self.router.responses.get(command, [])
        if queries:
            rows = [row for row in rows if all(row.get(k) == v for k, v in queries.items())]
        return [dict(row) for row in rows]

    def disconnect(self):
        self._connected = False
        self.closed = True

    def __enter__(self):
        return self.connect()

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.disconnect()
        return False


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_sync_db_and_tables(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def fake_router():
    return FakeRouter()


@pytest.fixture
def device(session):
    device = Device(name="Core Router", type="MikroTik", host="192.0.2.1", port=8728, username="admin", password="secret")
    session.add(device)
    session.commit()
    session.refresh(device)
    return device


@pytest.fixture
def switch_device(session):
    device = Device(name="Edge Switch", type="Generic", host="192.0.2.50", username="admin", password="secret")
    session.add(device)
    session.commit()
    session.refresh(device)
    return device

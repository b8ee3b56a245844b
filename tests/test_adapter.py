import pytest

from netinfra.core.constants import UNLIMITED_SHARED_USERS, ServiceKind
from netinfra.core.exceptions import EntityValidationError, RouterCommandError, RouterNotConnectedError
from netinfra.utils.device_clients.adapters.mikrotik_router import MikrotikRouterAdapter
from netinfra.utils.device_clients.adapters.records import (
    InterfaceStats,
    RemoteAccount,
    RemoteProfile,
    account_to_vendor_fields,
)

from conftest import FakeRouter


def _adapter(router):
    session = router.session_factory(host="192.0.2.1")
    session.connect()
    return MikrotikRouterAdapter(session)


def test_requires_active_session():
    adapter = MikrotikRouterAdapter(FakeRouter().session_factory(host="192.0.2.1"))
    with pytest.raises(RouterNotConnectedError):
        adapter.list_hotspot_users()


def test_test_connection_reports_identity_and_version():
    router = FakeRouter(
        {
            "/system/identity/print": [{"name": "core-1"}],
            "/system/resource/print": [{"version": "7.14.2 (stable)"}],
        }
    )
    assert _adapter(router).test_connection() == {"success": True, "identity": "core-1", "version": "7.14.2 (stable)"}


def test_test_connection_failure_returns_message():
    router = FakeRouter(errors={"/system/identity/print": RouterCommandError("no permission")})
    result = _adapter(router).test_connection()
    assert result["success"] is False
    assert "no permission" in result["message"]


def test_get_system_resource_parses_fields():
    router = FakeRouter(
        {
            "/system/resource/print": [
                {
                    "cpu-load": "12",
                    "total-memory": "1048576",
                    "free-memory": "262144",
                    "total-hdd-space": "1000",
                    "free-hdd-space": "250",
                    "uptime": "1d2h",
                    "board-name": "RB4011",
                    "version": "7.14",
                }
            ],
            "/system/health/print": [{"name": "temperature", "value": "41"}, {"name": "voltage", "value": "24.1"}],
        }
    )
    resource = _adapter(router).get_system_resource()

    assert resource.cpu_load_percent == 12.0
    assert resource.uptime_seconds == 93600
    assert resource.memory_usage_percent == 75.0
    assert resource.disk_usage_percent == 75.0
    assert resource.temperature == 41.0
    assert resource.voltage == 24.1
    assert resource.board_name == "RB4011"


def test_get_system_resource_returns_none_on_failure():
    router = FakeRouter(errors={"/system/resource/print": RouterCommandError("boom")})
    assert _adapter(router).get_system_resource() is None


def test_list_failure_returns_empty_list():
    router = FakeRouter(errors={"/ip/hotspot/user/print": RouterCommandError("no such command")})
    assert _adapter(router).list_hotspot_users() == []


def test_list_pppoe_users_excludes_other_ppp_services():
    router = FakeRouter(
        {
            "/ppp/secret/print": [
                {"name": "a", "service": "pppoe"},
                {"name": "b", "service": "any"},
                {"name": "c", "service": "l2tp"},
            ]
        }
    )
    assert [row["name"] for row in _adapter(router).list_pppoe_users()] == ["a", "b"]


def test_active_sessions_are_tagged_by_type():
    router = FakeRouter(
        {
            "/ip/hotspot/active/print": [{"user": "guest1"}],
            "/ppp/active/print": [{"name": "pppoe1"}],
        }
    )
    sessions = _adapter(router).list_active_sessions()
    assert sessions == [{"user": "guest1", "type": "hotspot"}, {"name": "pppoe1", "type": "pppoe"}]


def test_add_sends_only_vendor_fields():
    router = FakeRouter()
    ok = _adapter(router).add_hotspot_user({"name": "alice", "password": "pw", "customer_name": "Alice", "service": "x"})

    assert ok is True
    assert router.calls[-1] == ("/ip/hotspot/user/add", {"name": "alice", "password": "pw"}, {})


def test_update_resolves_id_by_name():
    router = FakeRouter({"/ppp/secret/print": [{".id": "*7", "name": "bob"}]})
    ok = _adapter(router).update_pppoe_user("bob", {"caller-id": "AA:BB", "disabled": "yes"})

    assert ok is True
    assert router.calls[0] == ("/ppp/secret/print", {}, {"name": "bob"})
    assert router.calls[1] == ("/ppp/secret/set", {".id": "*7", "caller-id": "AA:BB", "disabled": "yes"}, {})


def test_remove_missing_entry_returns_false():
    router = FakeRouter({"/ip/hotspot/user/print": []})
    assert _adapter(router).remove_hotspot_user("ghost") is False
    assert "/ip/hotspot/user/remove" not in router.commands


def test_rejected_write_returns_false():
    router = FakeRouter(errors={"/ip/hotspot/user/add": RouterCommandError("already have user")})
    assert _adapter(router).add_hotspot_user({"name": "alice"}) is False


def test_remote_account_parsing():
    account = RemoteAccount.from_fields(
        ServiceKind.PPPOE,
        {"name": " bob ", "password": "pw", "caller-id": "AA:BB", "disabled": "true", "uptime": "1h", "bytes-in": "10"},
    )
    assert account.username == "bob"
    assert account.caller_id == "AA:BB"
    assert account.disabled is True
    assert account.uptime == 3600
    assert account.bytes_in == 10
    assert account.bytes_out is None


def test_remote_account_without_name_is_rejected():
    with pytest.raises(EntityValidationError):
        RemoteAccount.from_fields(ServiceKind.HOTSPOT, {"name": "  ", "password": "pw"})


def test_remote_profile_parsing():
    hotspot = RemoteProfile.from_fields(
        ServiceKind.HOTSPOT, {"name": "1hour", "rate-limit": "2M/2M", "session-timeout": "1h", "shared-users": "3"}
    )
    assert (hotspot.rate_limit, hotspot.session_timeout, hotspot.shared_users) == ("2M/2M", 3600, 3)

    unlimited = RemoteProfile.from_fields(ServiceKind.HOTSPOT, {"name": "open", "shared-users": "unlimited"})
    assert unlimited.shared_users == UNLIMITED_SHARED_USERS
    assert RemoteProfile.from_fields(ServiceKind.HOTSPOT, {"name": "default"}).shared_users == 1

    ppp = RemoteProfile.from_fields(ServiceKind.PPPOE, {"name": "plan-10", "local-address": "10.0.0.1", "remote-address": "pool1"})
    assert (ppp.local_address, ppp.remote_address, ppp.session_timeout) == ("10.0.0.1", "pool1", None)


def test_interface_stats_parsing():
    stats = InterfaceStats.from_fields({"name": "ether1", "running": "true", "rx-byte": "100", "tx-byte": "200"})
    assert (stats.name, stats.running, stats.rx_byte, stats.tx_byte) == ("ether1", True, 100, 200)


def test_account_to_vendor_fields_translates_names():
    fields = account_to_vendor_fields(
        ServiceKind.PPPOE,
        {"username": "bob", "password": "pw", "caller_id": "AA:BB", "disabled": True, "customer_name": "Bob", "comment": None},
    )
    assert fields == {"name": "bob", "password": "pw", "caller-id": "AA:BB", "disabled": "yes"}

    hotspot = account_to_vendor_fields(ServiceKind.HOTSPOT, {"username": "a", "caller_id": "x", "disabled": False})
    assert hotspot == {"name": "a", "disabled": "no"}

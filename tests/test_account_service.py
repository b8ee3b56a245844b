import pytest
from sqlmodel import select

from netinfra.core.constants import ServiceKind
from netinfra.core.exceptions import DeviceNotFoundError, RouterCommandError
from netinfra.models.account import HotspotUser, PppoeUser
from netinfra.services.account_service import AccountService

from conftest import FakeRouter


def test_create_pushes_to_device(session, device):
    router = FakeRouter()
    service = AccountService(session, ServiceKind.HOTSPOT, router.session_factory)

    result = service.create_account({"device_id": device.id, "username": "alice", "password": "pw", "profile": "1hour"})

    assert result.pushed is True
    assert result.account.id is not None
    assert router.calls == [
        ("/ip/hotspot/user/add", {"name": "alice", "password": "pw", "profile": "1hour", "disabled": "no"}, {})
    ]


def test_pppoe_push_translates_fields_and_drops_local_ones(session, device):
    router = FakeRouter()
    service = AccountService(session, ServiceKind.PPPOE, router.session_factory)

    service.create_account(
        {
            "device_id": device.id,
            "username": "bob",
            "password": "pw",
            "service": "pppoe",
            "caller_id": "AA:BB:CC:DD:EE:FF",
            "customer_name": "Bob Smith",
            "service_cost": 30.0,
        }
    )

    command, params, _ = router.calls[0]
    assert command == "/ppp/secret/add"
    assert params["caller-id"] == "AA:BB:CC:DD:EE:FF"
    assert "customer_name" not in params and "service_cost" not in params


def test_push_failure_keeps_local_write(session, device):
    router = FakeRouter(fail_connect=True)
    service = AccountService(session, ServiceKind.HOTSPOT, router.session_factory)

    result = service.create_account({"device_id": device.id, "username": "alice", "password": "pw"})

    assert result.pushed is False
    assert "device update failed" in result.message
    assert session.exec(select(HotspotUser)).one().username == "alice"


def test_rejected_push_is_reported(session, device):
    router = FakeRouter(errors={"/ip/hotspot/user/add": RouterCommandError("already have user")})
    service = AccountService(session, ServiceKind.HOTSPOT, router.session_factory)

    result = service.create_account({"device_id": device.id, "username": "alice", "password": "pw"})

    assert result.pushed is False
    assert session.exec(select(HotspotUser)).one() is not None


def test_update_pushes_with_original_username(session, device):
    router = FakeRouter({"/ppp/secret/print": [{".id": "*3", "name": "bob"}]})
    service = AccountService(session, ServiceKind.PPPOE, router.session_factory)
    account = PppoeUser(device_id=device.id, username="bob", password="pw")
    session.add(account)
    session.commit()

    result = service.update_account(account.id, {"username": "bobby", "disabled": True, "contact_phone": "555"})

    assert result.pushed is True
    assert result.account.username == "bobby"
    assert result.account.contact_phone == "555"
    assert router.calls[0] == ("/ppp/secret/print", {}, {"name": "bob"})
    command, params, _ = router.calls[1]
    assert command == "/ppp/secret/set"
    assert params[".id"] == "*3"
    assert params["name"] == "bobby"
    assert params["disabled"] == "yes"


def test_delete_of_entry_missing_on_device(session, device):
    router = FakeRouter({"/ip/hotspot/user/print": []})
    service = AccountService(session, ServiceKind.HOTSPOT, router.session_factory)
    account = HotspotUser(device_id=device.id, username="ghost", password="pw")
    session.add(account)
    session.commit()

    result = service.delete_account(account.id)

    assert result.pushed is False
    assert session.exec(select(HotspotUser)).all() == []


def test_non_mikrotik_device_is_saved_locally_only(session, switch_device):
    router = FakeRouter()
    service = AccountService(session, ServiceKind.HOTSPOT, router.session_factory)

    result = service.create_account({"device_id": switch_device.id, "username": "alice", "password": "pw"})

    assert result.pushed is False
    assert router.calls == []


def test_duplicate_username_raises_value_error(session, device):
    service = AccountService(session, ServiceKind.HOTSPOT, FakeRouter().session_factory)
    service.create_account({"device_id": device.id, "username": "alice", "password": "pw"})

    with pytest.raises(ValueError):
        service.create_account({"device_id": device.id, "username": "alice", "password": "other"})


def test_create_for_unknown_device(session):
    service = AccountService(session, ServiceKind.HOTSPOT, FakeRouter().session_factory)
    with pytest.raises(DeviceNotFoundError):
        service.create_account({"device_id": 404, "username": "alice", "password": "pw"})

import subprocess
from datetime import datetime, timedelta
from types import SimpleNamespace

import pytest
from sqlmodel import Session, select

from netinfra.core.constants import PING_FAILED_MESSAGE
from netinfra.models.wan import WanMonitor, WanPingHistory
from netinfra.services import wan_monitor_service
from netinfra.services.wan_monitor_scheduler import JOB_ID, WanMonitorScheduler
from netinfra.services.wan_monitor_service import (
    PingResult,
    WanMonitorService,
    build_ping_command,
    parse_ping_output,
    ping_host,
)

LINUX_OK = """PING 8.8.8.8 (8.8.8.8) 56(84) bytes of data.
64 bytes from 8.8.8.8: icmp_seq=1 ttl=117 time=12.4 ms

--- 8.8.8.8 ping statistics ---
1 packets transmitted, 1 received, 0% packet loss, time 0ms
rtt min/avg/max/mdev = 12.400/12.400/12.400/0.000 ms
"""

LINUX_LOST = """PING 10.255.255.1 (10.255.255.1) 56(84) bytes of data.

--- 10.255.255.1 ping statistics ---
1 packets transmitted, 0 received, 100% packet loss, time 0ms
"""

WINDOWS_OK = """Pinging 1.1.1.1 with 32 bytes of data:
Reply from 1.1.1.1: bytes=32 time<1ms TTL=57

Ping statistics for 1.1.1.1:
    Packets: Sent = 1, Received = 1, Lost = 0 (0% loss),
"""


class Clock:
    def __init__(self, start=datetime(2024, 1, 1, 12, 0, 0)):
        self.now = start

    def __call__(self):
        self.now = self.now + timedelta(seconds=1)
        return self.now


def fixed_pinger(result):
    def pinger(host, timeout=5.0):
        return result

    return pinger


@pytest.fixture
def monitor(session):
    monitor = WanMonitor(name="Google DNS", host="8.8.8.8")
    session.add(monitor)
    session.commit()
    session.refresh(monitor)
    return monitor


def test_build_ping_command():
    assert build_ping_command("8.8.8.8", 5, system="Linux") == ["ping", "-c", "1", "-W", "5", "8.8.8.8"]
    assert build_ping_command("8.8.8.8", 5, system="Windows") == ["ping", "-n", "1", "-w", "5000", "8.8.8.8"]


def test_parse_linux_reply():
    assert parse_ping_output(LINUX_OK) == PingResult(success=True, latency=12.4)


def test_parse_windows_sub_millisecond_reply():
    assert parse_ping_output(WINDOWS_OK) == PingResult(success=True, latency=1.0)


def test_parse_lost_packet():
    assert parse_ping_output(LINUX_LOST) == PingResult(success=False, error=PING_FAILED_MESSAGE)


def test_duplicate_replies_are_not_success():
    output = LINUX_OK.replace("1 received", "2 received")
    assert parse_ping_output(output).success is False


def test_ping_timeout(monkeypatch):
    def fake_run(*args, **kwargs):
        raise subprocess.TimeoutExpired(cmd="ping", timeout=kwargs.get("timeout"))

    monkeypatch.setattr(wan_monitor_service.subprocess, "run", fake_run)
    assert ping_host("10.255.255.1", timeout=1) == PingResult(success=False, error=PING_FAILED_MESSAGE)


def test_ping_missing_binary(monkeypatch):
    def fake_run(*args, **kwargs):
        raise FileNotFoundError("[Errno 2] No such file or directory: 'ping'")

    monkeypatch.setattr(wan_monitor_service.subprocess, "run", fake_run)
    result = ping_host("8.8.8.8")
    assert result.success is False
    assert "No such file" in result.error


def test_ping_host_uses_subprocess_output(monkeypatch):
    captured = {}

    def fake_run(cmd, **kwargs):
        captured["cmd"] = cmd
        return SimpleNamespace(stdout=LINUX_OK, returncode=0)

    monkeypatch.setattr(wan_monitor_service.subprocess, "run", fake_run)
    monkeypatch.setattr(wan_monitor_service.platform, "system", lambda: "Linux")

    assert ping_host("8.8.8.8", timeout=2).latency == 12.4
    assert captured["cmd"] == ["ping", "-c", "1", "-W", "2", "8.8.8.8"]


def test_ping_host_rejects_option_like_hosts():
    assert ping_host("-f").success is False
    assert ping_host("8.8.8.8\x00").success is False


def test_ping_monitor_updates_state_and_history(session, monitor):
    service = WanMonitorService(session, pinger=fixed_pinger(PingResult(True, 9.5)), clock=Clock())

    result = service.ping_monitor(monitor.id)

    assert result.success is True
    session.refresh(monitor)
    assert monitor.last_ping_success is True
    assert monitor.last_ping_latency == 9.5
    history = session.exec(select(WanPingHistory)).all()
    assert len(history) == 1 and history[0].latency == 9.5


def test_ping_monitor_works_for_inactive_monitor(session):
    monitor = WanMonitor(name="Backup", host="192.0.2.9", is_active=False)
    session.add(monitor)
    session.commit()

    service = WanMonitorService(session, pinger=fixed_pinger(PingResult(False, error=PING_FAILED_MESSAGE)), clock=Clock())
    result = service.ping_monitor(monitor.id)

    assert result.success is False
    session.refresh(monitor)
    assert monitor.last_ping_success is False


def test_history_is_capped_to_newest_rows(session, monitor):
    clock = Clock()
    service = WanMonitorService(session, pinger=fixed_pinger(PingResult(True, 1.0)), clock=clock, history_limit=1000)

    for _ in range(1001):
        service.ping_monitor(monitor.id)

    rows = session.exec(
        select(WanPingHistory).where(WanPingHistory.wan_monitor_id == monitor.id).order_by(WanPingHistory.ping_time)
    ).all()
    assert len(rows) == 1000
    assert rows[0].ping_time == datetime(2024, 1, 1, 12, 0, 2)
    assert rows[-1].ping_time == clock.now


def test_prune_history_returns_deleted_count(session, monitor):
    service = WanMonitorService(session, pinger=fixed_pinger(PingResult(True, 1.0)), clock=Clock(), history_limit=10)
    for _ in range(5):
        service.ping_monitor(monitor.id)

    assert service.prune_history(monitor.id, keep=2) == 3
    assert service.prune_history(monitor.id, keep=2) == 0


def test_sweep_skips_inactive_and_isolates_failures(session):
    session.add_all(
        [
            WanMonitor(name="A", host="192.0.2.1"),
            WanMonitor(name="B", host="192.0.2.2"),
            WanMonitor(name="C", host="192.0.2.3", is_active=False),
        ]
    )
    session.commit()

    def pinger(host, timeout=5.0):
        if host == "192.0.2.1":
            raise RuntimeError("pinger crashed")
        return PingResult(True, 3.0)

    report = WanMonitorService(session, pinger=pinger, clock=Clock()).ping_all_active_monitors()

    assert (report.total, report.succeeded, report.failed) == (2, 1, 1)
    b = session.exec(select(WanMonitor).where(WanMonitor.name == "B")).one()
    c = session.exec(select(WanMonitor).where(WanMonitor.name == "C")).one()
    assert b.last_ping_success is True
    assert c.last_ping_time is None



def test_get_all_lists_newest_first(session):
    session.add_all(
        [
            WanMonitor(name="Old", host="192.0.2.1", created_at=datetime(2024, 1, 1)),
            WanMonitor(name="New", host="192.0.2.2", created_at=datetime(2024, 3, 1)),
            WanMonitor(name="Mid", host="192.0.2.3", created_at=datetime(2024, 2, 1)),
        ]
    )
    session.commit()

    assert [m.name for m in WanMonitorService(session).get_all()] == ["New", "Mid", "Old"]

def test_get_history_window(session, monitor):
    clock = Clock()
    service = WanMonitorService(session, pinger=fixed_pinger(PingResult(True, 1.0)), clock=clock)
    service.ping_monitor(monitor.id)
    clock.now += timedelta(hours=30)
    service.ping_monitor(monitor.id)

    assert len(service.get_history(monitor.id, hours=24)) == 1


class RecordingScheduler:
    def __init__(self):
        self.jobs = []
        self.listeners = []
        self.running = False

    def add_listener(self, callback, mask):
        self.listeners.append((callback, mask))

    def add_job(self, func, **kwargs):
        self.jobs.append((func, kwargs))

    def start(self):
        self.running = True

    def shutdown(self, wait=True):
        self.running = False


def test_scheduler_registers_single_job():
    backend = RecordingScheduler()
    scheduler = WanMonitorScheduler(interval_seconds=120, scheduler=backend)

    scheduler.start()
    scheduler.start()

    assert backend.running
    assert len(backend.jobs) == 1
    func, kwargs = backend.jobs[0]
    assert kwargs["id"] == JOB_ID
    assert kwargs["replace_existing"] is True
    assert kwargs["max_instances"] == 1
    assert kwargs["coalesce"] is True
    assert kwargs["trigger"].interval == timedelta(seconds=120)

    scheduler.shutdown()
    assert not backend.running


def test_scheduler_sweep_uses_own_session(engine):
    with Session(engine) as setup:
        setup.add(WanMonitor(name="A", host="192.0.2.1"))
        setup.commit()

    scheduler = WanMonitorScheduler(
        session_factory=lambda: Session(engine),
        scheduler=RecordingScheduler(),
        pinger=fixed_pinger(PingResult(True, 2.0)),
        clock=Clock(),
    )
    report = scheduler.run_sweep()

    assert (report.total, report.succeeded) == (1, 1)
    with Session(engine) as check:
        assert len(check.exec(select(WanPingHistory)).all()) == 1

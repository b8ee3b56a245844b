# netinfra/services/wan_monitor_service.py
"""
WAN reachability checks.

`ping_host()` runs a single ICMP echo through the system `ping` binary and
parses the round-trip time. `WanMonitorService` stores the outcome on the
monitor row, appends it to the per-monitor history and keeps that history
capped at the newest `history_limit` rows.
"""
import logging
import platform
import re
import subprocess
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Callable, List, Optional

from sqlmodel import Session, select

from ..core.config import settings
from ..core.constants import PING_FAILED_MESSAGE
from ..models.wan import WanMonitor, WanPingHistory
from ..utils.timeutils import utcnow
from .base_service import BaseCRUDService

logger = logging.getLogger(__name__)

RE_TIME = re.compile(r"time\s*[=<]\s*([0-9.]+)\s*ms", re.IGNORECASE)
RE_RECEIVED_POSIX = re.compile(r"(\d+)\s+(?:packets\s+)?received")
RE_RECEIVED_WINDOWS = re.compile(r"Received\s*=\s*(\d+)")


@dataclass
class PingResult:
    success: bool
    latency: Optional[float] = None  # ms
    error: Optional[str] = None


@dataclass
class PingSweepReport:
    total: int = 0
    succeeded: int = 0
    failed: int = 0
    results: List[dict] = field(default_factory=list)


def build_ping_command(host: str, timeout: float, system: Optional[str] = None) -> List[str]:
    system = (system or platform.system()).lower()
    if system == "windows":
        return ["ping", "-n", "1", "-w", str(int(timeout * 1000)), host]
    return ["ping", "-c", "1", "-W", str(max(1, int(round(timeout)))), host]


def parse_ping_output(output: str) -> PingResult:
    """
    A ping succeeds only when exactly one reply carries a round-trip time and
    the summary line (if present) reports one packet received.
    """
    times = RE_TIME.findall(output or "")
    received = RE_RECEIVED_WINDOWS.search(output or "") or RE_RECEIVED_POSIX.search(output or "")
    received_ok = received is None or int(received.group(1)) == 1

    if len(times) == 1 and received_ok:
        try:
            return PingResult(success=True, latency=float(times[0]))
        except ValueError:
            pass
    return PingResult(success=False, error=PING_FAILED_MESSAGE)


def ping_host(host: str, timeout: float = 5.0) -> PingResult:
    """Single ICMP echo. Never raises."""
    host = (host or "").strip()
    if not host or host.startswith("-") or "\x00" in host:
        return PingResult(success=False, error=f"Invalid host: {host!r}")

    cmd = build_ping_command(host, timeout)
    try:
        proc = subprocess.run(
            cmd,
            stdout=subprocess.PIPE,
            stderr=subprocess.STDOUT,
            text=True,
            timeout=timeout + 1,
            check=False,
        )
    except subprocess.TimeoutExpired:
        return PingResult(success=False, error=PING_FAILED_MESSAGE)
    except (OSError, ValueError) as e:
        logger.error(f"[WanMonitor] Could not run ping: {e}")
        return PingResult(success=False, error=str(e))

    return parse_ping_output(proc.stdout)


class WanMonitorService(BaseCRUDService[WanMonitor]):
    def __init__(
        self,
        session: Session,
        pinger: Callable[..., PingResult] = ping_host,
        clock: Callable[[], datetime] = utcnow,
        history_limit: Optional[int] = None,
        ping_timeout: Optional[float] = None,
    ):
        super().__init__(session, WanMonitor)
        self.pinger = pinger
        self.clock = clock
        self.history_limit = history_limit if history_limit is not None else settings.wan_history_limit
        self.ping_timeout = ping_timeout if ping_timeout is not None else settings.wan_ping_timeout

    def get_all(self) -> List[WanMonitor]:
        return self.session.exec(select(WanMonitor).order_by(WanMonitor.created_at.desc(), WanMonitor.id.desc())).all()

    def get_active_monitors(self) -> List[WanMonitor]:
        return self.session.exec(select(WanMonitor).where(WanMonitor.is_active == True)).all()  # noqa: E712

    def ping_monitor(self, monitor_id: int) -> PingResult:
        """Probes one monitor regardless of its active flag."""
        monitor = self.get_by_id(monitor_id)
        result = self.pinger(monitor.host, timeout=self.ping_timeout)
        self._record(monitor, result)
        return result

    def ping_all_active_monitors(self) -> PingSweepReport:
        monitors = self.get_active_monitors()
        report = PingSweepReport(total=len(monitors))

        for monitor in monitors:
            monitor_id, name = monitor.id, monitor.name
            try:
                result = self.pinger(monitor.host, timeout=self.ping_timeout)
                self._record(monitor, result)
            except Exception as e:
                self.session.rollback()
                logger.error(f"[WanMonitor] Sweep failed for '{name}': {e}")
                report.failed += 1
                report.results.append({"monitor_id": monitor_id, "success": False, "latency": None, "error": str(e)})
                continue

            if result.success:
                report.succeeded += 1
            else:
                report.failed += 1
            report.results.append(
                {"monitor_id": monitor_id, "success": result.success, "latency": result.latency, "error": result.error}
            )

        logger.info(f"[WanMonitor] Sweep: {report.succeeded}/{report.total} reachable")
        return report

    def _record(self, monitor: WanMonitor, result: PingResult) -> None:
        now = self.clock()
        monitor.last_ping_time = now
        monitor.last_ping_success = result.success
        monitor.last_ping_latency = result.latency
        self.session.add(monitor)
        self.session.add(
            WanPingHistory(
                wan_monitor_id=monitor.id,
                ping_time=now,
                success=result.success,
                latency=result.latency,
                error_message=result.error,
            )
        )
        self.session.commit()
        self.prune_history(monitor.id)

    def prune_history(self, monitor_id: int, keep: Optional[int] = None) -> int:
        """Deletes all but the newest `keep` history rows. Returns the count deleted."""
        keep = self.history_limit if keep is None else keep
        stale = self.session.exec(
            select(WanPingHistory)
            .where(WanPingHistory.wan_monitor_id == monitor_id)
            .order_by(WanPingHistory.ping_time.desc(), WanPingHistory.id.desc())
            .offset(keep)
        ).all()
        if not stale:
            return 0

        for row in stale:
            self.session.delete(row)
        self.session.commit()
        return len(stale)

    def get_history(self, monitor_id: int, hours: int = 24) -> List[WanPingHistory]:
        self.get_by_id(monitor_id)
        since = self.clock() - timedelta(hours=hours)
        return self.session.exec(
            select(WanPingHistory)
            .where(WanPingHistory.wan_monitor_id == monitor_id, WanPingHistory.ping_time >= since)
            .order_by(WanPingHistory.ping_time.desc())
        ).all()

    def delete(self, id: int) -> None:
        self.get_by_id(id)
        history = self.session.exec(select(WanPingHistory).where(WanPingHistory.wan_monitor_id == id)).all()
        for row in history:
            self.session.delete(row)
        super().delete(id)

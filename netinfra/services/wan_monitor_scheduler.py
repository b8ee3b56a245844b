# netinfra/services/wan_monitor_scheduler.py
import logging
from typing import Callable, Optional

from apscheduler.events import EVENT_JOB_ERROR, EVENT_JOB_EXECUTED
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.interval import IntervalTrigger
from sqlmodel import Session

from ..core.config import settings
from ..utils.timeutils import utcnow
from .wan_monitor_service import PingSweepReport, WanMonitorService, ping_host

logger = logging.getLogger(__name__)

JOB_ID = "wan_monitor_sweep"


def job_listener(event):
    if event.exception:
        logger.error(f"[WanScheduler] Job {event.job_id} failed: {event.exception}")
    else:
        logger.debug(f"[WanScheduler] Job {event.job_id} executed")


def _default_session_factory() -> Session:
    from ..db.engine import sync_engine

    return Session(sync_engine)


class WanMonitorScheduler:
    """
    Periodic WAN sweep on an APScheduler BackgroundScheduler.

    The job never overlaps itself (max_instances=1) and missed runs collapse
    into one (coalesce). Each run opens its own database session.
    """

    def __init__(
        self,
        session_factory: Optional[Callable[[], Session]] = None,
        interval_seconds: Optional[int] = None,
        scheduler: Optional[BackgroundScheduler] = None,
        pinger=ping_host,
        clock=utcnow,
        history_limit: Optional[int] = None,
    ):
        self.session_factory = session_factory or _default_session_factory
        self.interval_seconds = interval_seconds or settings.wan_ping_interval_seconds
        self.pinger = pinger
        self.clock = clock
        self.history_limit = history_limit
        self.scheduler = scheduler or BackgroundScheduler(
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": self.interval_seconds,
            }
        )

    def run_sweep(self) -> PingSweepReport:
        with self.session_factory() as session:
            service = WanMonitorService(
                session, pinger=self.pinger, clock=self.clock, history_limit=self.history_limit
            )
            return service.ping_all_active_monitors()

    def start(self) -> None:
        if self.scheduler.running:
            logger.debug("[WanScheduler] Already running")
            return
        self.scheduler.add_listener(job_listener, EVENT_JOB_EXECUTED | EVENT_JOB_ERROR)
        self.scheduler.add_job(
            self.run_sweep,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=JOB_ID,
            name="WAN Monitor Sweep",
            replace_existing=True,
            coalesce=True,
            max_instances=1,
        )
        self.scheduler.start()
        logger.info(f"[WanScheduler] Started, sweeping every {self.interval_seconds}s")

    def shutdown(self, wait: bool = False) -> None:
        if self.scheduler.running:
            self.scheduler.shutdown(wait=wait)
            logger.info("[WanScheduler] Stopped")

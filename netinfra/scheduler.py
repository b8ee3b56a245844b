# netinfra/scheduler.py
"""
Standalone scheduler process: python -m netinfra.scheduler
"""
import logging
import time

from .core.config import settings

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(levelname)s - [Scheduler] - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
logger = logging.getLogger("Scheduler")


def run_scheduler():
    from .db.init_db import setup_database
    from .services.wan_monitor_scheduler import WanMonitorScheduler

    setup_database()

    wan_scheduler = WanMonitorScheduler()
    wan_scheduler.start()
    logger.info(f"Scheduler running, WAN sweep every {wan_scheduler.interval_seconds}s")

    try:
        while True:
            time.sleep(60)
    except (KeyboardInterrupt, SystemExit):
        logger.info("Stopping scheduler...")
        wan_scheduler.shutdown()


if __name__ == "__main__":
    run_scheduler()

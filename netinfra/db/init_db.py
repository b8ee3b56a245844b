# netinfra/db/init_db.py
import logging

from sqlmodel import Session, select

from ..core.constants import DEFAULT_WAN_MONITORS
from ..models.wan import WanMonitor
from .engine import create_sync_db_and_tables, sync_engine

logger = logging.getLogger(__name__)


def seed_default_wan_monitors(session: Session) -> int:
    """
    Creates the default WAN monitors when the table is empty.
    Returns the number of monitors created.
    """
    if session.exec(select(WanMonitor.id)).first() is not None:
        logger.info("[InitDB] WAN monitors already exist")
        return 0

    for data in DEFAULT_WAN_MONITORS:
        session.add(WanMonitor(**data))
    session.commit()
    logger.info(f"[InitDB] Created {len(DEFAULT_WAN_MONITORS)} default WAN monitors")
    return len(DEFAULT_WAN_MONITORS)


def setup_database(engine=None) -> None:
    """Idempotent: creates the schema and seeds default rows."""
    engine = engine or sync_engine
    create_sync_db_and_tables(engine)
    with Session(engine) as session:
        seed_default_wan_monitors(session)

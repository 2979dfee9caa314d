"""
Create any missing tables directly from the SQLAlchemy models.

Usage:
    python create_all_tables.py

Use this for a fresh database when Alembic is not available; the app itself
runs Alembic migrations on startup.
"""
import sys
import logging

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger(__name__)

from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from database import Base, engine
from alembic_runner import get_current_revision

# Import models to register with SQLAlchemy Base
from Subscriber_module.Subscriber_model import Subscriber

EXPECTED_TABLES = {
    'email_subscribers': 'Subscriber_module.Subscriber_model.Subscriber',
}


def create_missing_tables() -> int:
    """Create tables that are registered but missing. Returns the number created."""
    existing = set(inspect(engine).get_table_names())
    missing = [name for name in EXPECTED_TABLES if name not in existing]

    if not missing:
        logger.info("All %s table(s) already exist", len(EXPECTED_TABLES))
        return 0

    for name in missing:
        logger.info("Creating table %s (%s)", name, EXPECTED_TABLES[name])

    Base.metadata.create_all(bind=engine, tables=[Base.metadata.tables[name] for name in missing])
    logger.info("Created %s table(s)", len(missing))
    return len(missing)


if __name__ == "__main__":
    try:
        create_missing_tables()
    except OperationalError as e:
        logger.error(f"Failed to connect to database: {e}")
        sys.exit(1)
    logger.info("Current Alembic revision: %s", get_current_revision())

"""CLI entry point for database setup."""
import logging

from stock_portfolio.config import Settings
from stock_portfolio.db.sessions import create_db_engine, init_db

logger = logging.getLogger(__name__)


def create_tables() -> None:
    """Create any missing tables in DATABASE_URL. Safe to run repeatedly."""
    settings = Settings.from_env()
    logging.basicConfig(level=settings.log_level)
    engine = create_db_engine(settings.database_url, echo=settings.sql_echo)
    try:
        init_db(engine)
    finally:
        engine.dispose()
    logger.info("Tables ready in %s", engine.url.render_as_string(hide_password=True))

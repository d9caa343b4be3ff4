"""Create the database schema"""

import logging

from sqlalchemy.engine import Engine

from snippetbox.db.base import Base

# Import all models explicitly to register them with SQLAlchemy
from snippetbox.db.models import session_store as _model_session_store  # noqa: F401
from snippetbox.db.models import snippet as _model_snippet  # noqa: F401
from snippetbox.db.models import user as _model_user  # noqa: F401

logger = logging.getLogger(__name__)


def init_database(engine: Engine) -> None:
    """Create every table that does not exist yet"""
    try:
        Base.metadata.create_all(bind=engine)
    except Exception as e:
        logger.error(
            "Error initializing database: %s",
            e,
            extra={"error_type": type(e).__name__, "database_url": "[REDACTED]"},
        )
        raise

    table_names = [table.name for table in Base.metadata.sorted_tables]
    logger.info("Database tables ready", extra={"table_count": len(table_names), "tables": table_names})

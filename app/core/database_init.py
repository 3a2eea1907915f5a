"""Database initialization module.

Creates the catalog tables on app startup if they do not exist yet.
"""

import logging

from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from app.models import Base

logger = logging.getLogger(__name__)


def init_database_schema(engine: Engine) -> None:
    """Create missing tables for every model registered on ``Base``.

    Args:
        engine: Engine bound to settings.DATABASE_URL

    Raises:
        SQLAlchemyError: If table creation fails
    """
    try:
        Base.metadata.create_all(bind=engine)
        logger.info("Database schema initialized (%s)", ", ".join(sorted(Base.metadata.tables)))
    except SQLAlchemyError as e:
        logger.error(f"Failed to initialize database schema: {str(e)}")
        raise

"""Database session dependency."""

from balance_server.infrastructure.database import get_session

get_db_session = get_session

__all__ = ["get_db_session"]

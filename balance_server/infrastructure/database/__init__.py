"""Database infrastructure helpers (engine, sessions, store guards)."""

from .base import Base
from .session import get_engine, get_session, init_db
from .store import guarded_read, guarded_write

__all__ = ["Base", "get_engine", "get_session", "init_db", "guarded_read", "guarded_write"]

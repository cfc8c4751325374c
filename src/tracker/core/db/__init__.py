"""Database utilities - engine, session, transactions."""

from src.tracker.core.db.engine import configure_engine, dispose_engine, get_engine
from src.tracker.core.db.session import atomic, get_session, in_atomic_block

__all__ = [
    # Engine
    "configure_engine",
    "dispose_engine",
    "get_engine",
    # Session
    "atomic",
    "get_session",
    "in_atomic_block",
]

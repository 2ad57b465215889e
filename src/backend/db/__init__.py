"""Database module."""

from db.session import close_db, get_db, init_db

__all__ = ["get_db", "init_db", "close_db"]

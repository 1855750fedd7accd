from parkwatch.db.base import Base
from parkwatch.db.session import SessionLocal, engine, get_db, init_db
from parkwatch.db.tables import ALL_TABLE_NAMES

__all__ = ["get_db", "engine", "SessionLocal", "Base", "init_db", "ALL_TABLE_NAMES"]

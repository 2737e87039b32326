from team_availability.db.base import Base
from team_availability.db.session import SessionLocal, create_all, engine, get_db
from team_availability.db.tables import ALL_TABLE_NAMES

__all__ = ["get_db", "engine", "SessionLocal", "Base", "create_all", "ALL_TABLE_NAMES"]

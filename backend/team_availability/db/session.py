"""
Database session and engine.
"""
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker

from team_availability.config import settings
from team_availability.db.base import Base


def make_engine(database_url: str, **kwargs) -> Engine:
    """Engine with pool settings for the server; SQLite gets thread-shareable connections."""
    if database_url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
        return create_engine(database_url, **kwargs)
    return create_engine(
        database_url,
        pool_size=8,
        max_overflow=10,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_timeout=30,
        **kwargs,
    )


engine = make_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def create_all(bind: Engine | None = None) -> None:
    """Create tables for local SQLite use. Production schemas come from alembic."""
    import team_availability.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)

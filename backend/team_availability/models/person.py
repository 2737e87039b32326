"""Participant identity: display name, color tag and the credential chosen on first login."""
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, String
from sqlalchemy.sql import func

from team_availability.core.constants import MAX_NAME_LENGTH, MAX_SECRET_LENGTH
from team_availability.db.base import Base


class Person(Base):
    __tablename__ = "people"

    id = Column(String(36), primary_key=True)
    name = Column(String(MAX_NAME_LENGTH), nullable=False)
    # casefold(strip(name)); unique so racing first logins collapse to one row
    name_key = Column(String(MAX_NAME_LENGTH), nullable=False, unique=True, index=True)
    color = Column(String(16), nullable=False)
    secret = Column(String(MAX_SECRET_LENGTH), nullable=True)  # NULL for seeded/legacy rows
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(timezone.utc), server_default=func.now(), nullable=False)

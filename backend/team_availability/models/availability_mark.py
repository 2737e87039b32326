"""One row per (person_id, date): person is unavailable that day. Absence = available."""
from sqlalchemy import Column, ForeignKey, String

from team_availability.db.base import Base


class AvailabilityMark(Base):
    __tablename__ = "availability"

    person_id = Column(String(36), ForeignKey("people.id"), primary_key=True)
    date = Column(String(10), primary_key=True)  # YYYY-MM-DD

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Timetable(Base):
    """Weekly schedule of one lab.

    ``schedule`` holds the day/time-slot document as written by the client:
    ``[{"day": "Monday", "timeSlots": [{"hour": ..., "subject": ..., ...}]}]``.
    """
    __tablename__ = "timetables"

    id = Column(Integer, primary_key=True, index=True)
    lab_id = Column(Integer, ForeignKey("labs.id"), unique=True, nullable=False)
    lab_name = Column(String(150), nullable=False)
    schedule = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    lab = relationship("Lab", back_populates="timetable")

from sqlalchemy import Column, Integer, String, DateTime, Text, CheckConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ..database import Base


class Lab(Base):
    """A physical laboratory and its inventory."""
    __tablename__ = "labs"
    __table_args__ = (
        CheckConstraint("capacity >= 1", name="ck_labs_capacity_positive"),
        CheckConstraint("available_system >= 0", name="ck_labs_available_system"),
        CheckConstraint("working_system >= 0", name="ck_labs_working_system"),
    )

    id = Column(Integer, primary_key=True, index=True)
    lab_name = Column(String(150), nullable=False)
    department = Column(String(150), nullable=False)
    location = Column(String(150), nullable=False)
    capacity = Column(Integer, nullable=False)
    equipments = Column(Text, nullable=False)
    available_system = Column(Integer, nullable=False)
    working_system = Column(Integer, nullable=False)
    incharge = Column(String(100), nullable=False)
    technician = Column(String(100), nullable=False)
    software = Column(Text, nullable=False)
    specifications = Column(Text, nullable=False)
    lab_type = Column(String(20), nullable=False, index=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    # Relationships
    timetable = relationship("Timetable", back_populates="lab", uselist=False)

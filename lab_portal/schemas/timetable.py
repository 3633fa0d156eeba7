from enum import Enum
from pydantic import AfterValidator, Field
from typing import Annotated, List, Optional
from datetime import datetime
from .base import CamelModel
from .lab import LabResponse


class Weekday(str, Enum):
    MONDAY = "Monday"
    TUESDAY = "Tuesday"
    WEDNESDAY = "Wednesday"
    THURSDAY = "Thursday"
    FRIDAY = "Friday"


WEEKDAYS = [day.value for day in Weekday]

# Period table the client renders; hour labels are matched against it by exact string.
TIME_SLOTS = [
    {"period": 1, "time": "9:00 - 9:50"},
    {"period": 2, "time": "9:50 - 10:40"},
    {"period": 3, "time": "10:55 - 11:45"},
    {"period": 4, "time": "11:45 - 12:35"},
    {"period": 5, "time": "1:20 - 2:10"},
    {"period": 6, "time": "2:10 - 3:00"},
    {"period": 7, "time": "3:15 - 4:05"},
]


class TimeSlot(CamelModel):
    hour: str = Field(..., min_length=1)
    subject: str = ""
    faculty: str = ""
    class_label: str = Field("", alias="class")
    is_available: bool = True


class DaySchedule(CamelModel):
    day: Weekday
    time_slots: List[TimeSlot] = []


def check_schedule(schedule: List[DaySchedule]) -> List[DaySchedule]:
    """Reject repeated weekdays and return the days in Monday..Friday order."""
    days = [entry.day for entry in schedule]
    if len(days) != len(set(days)):
        raise ValueError("each weekday may appear at most once in a schedule")
    return sorted(schedule, key=lambda entry: WEEKDAYS.index(entry.day.value))


Schedule = Annotated[List[DaySchedule], AfterValidator(check_schedule)]


class TimetableCreate(CamelModel):
    lab_id: int
    lab_name: str = Field(..., min_length=1, max_length=150)
    schedule: Schedule


class TimetableUpdate(CamelModel):
    lab_id: Optional[int] = None
    lab_name: Optional[str] = Field(None, min_length=1, max_length=150)
    schedule: Optional[Schedule] = None


class TimetableResponse(CamelModel):
    """A stored timetable, or the empty placeholder for a lab without one.

    The placeholder carries only ``lab_id`` and an empty ``schedule``; routes
    serialize with ``exclude_none`` so it renders as ``{"labId": .., "schedule": []}``.
    """
    id: Optional[int] = None
    lab_id: int
    lab_name: Optional[str] = None
    schedule: List[DaySchedule] = []
    lab: Optional[LabResponse] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class SlotTable(CamelModel):
    days: List[str]
    time_slots: List[dict]

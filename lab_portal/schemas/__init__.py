from .user import (
    Credentials, AdminCredentials, GoogleToken,
    UserResponse, UserSummary, AdminResponse,
    ProfileUpdate, UserStatusUpdate
)
from .lab import LabCreate, LabUpdate, LabResponse, LabSummary
from .timetable import (
    Weekday, WEEKDAYS, TIME_SLOTS,
    TimeSlot, DaySchedule,
    TimetableCreate, TimetableUpdate, TimetableResponse, SlotTable
)

__all__ = [
    "Credentials", "AdminCredentials", "GoogleToken",
    "UserResponse", "UserSummary", "AdminResponse",
    "ProfileUpdate", "UserStatusUpdate",
    # Lab schemas
    "LabCreate", "LabUpdate", "LabResponse", "LabSummary",
    # Timetable schemas
    "Weekday", "WEEKDAYS", "TIME_SLOTS",
    "TimeSlot", "DaySchedule",
    "TimetableCreate", "TimetableUpdate", "TimetableResponse", "SlotTable"
]

from ..database import Base
from .user import User, Admin
from .lab import Lab
from .timetable import Timetable

__all__ = [
    "Base",
    "User",
    "Admin",
    "Lab",
    "Timetable",
]

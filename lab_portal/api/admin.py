from datetime import datetime
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional
from ..database import get_db
from ..models.lab import Lab
from ..models.timetable import Timetable
from ..models.user import User
from ..schemas.lab import LabCreate, LabResponse, LabUpdate
from ..schemas.timetable import WEEKDAYS
from ..schemas.user import UserResponse, UserStatusUpdate
from ..core.exceptions import NotFound
from ..core.permissions import require_admin
from ..services import labs as lab_service
from ..services.timetables import count_booked_slots

router = APIRouter(
    prefix="/api/admin",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


def current_weekday(now: Optional[datetime] = None) -> Optional[str]:
    """Timetable day name for ``now``, or None on weekends."""
    day = (now or datetime.now()).weekday()
    return WEEKDAYS[day] if day < len(WEEKDAYS) else None


@router.get("/dashboard")
def get_dashboard(db: Session = Depends(get_db)):
    """Counts for the admin landing page"""
    today = current_weekday()
    return {
        "totalUsers": db.query(User).count(),
        "totalLabs": db.query(Lab).count(),
        "totalTimetables": db.query(Timetable).count(),
        "todayBookings": count_booked_slots(db, today) if today else 0,
    }


# User management
def _get_user(db: Session, user_id: int) -> User:
    user = db.query(User).filter(User.id == user_id).first()
    if not user:
        raise NotFound("User not found.")
    return user


@router.get("/users", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return db.query(User).order_by(User.created_at.desc(), User.id.desc()).all()


@router.get("/users/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return _get_user(db, user_id)


@router.put("/users/{user_id}/status")
def set_user_status(user_id: int, body: UserStatusUpdate, db: Session = Depends(get_db)):
    """Activate or deactivate a user account"""
    user = _get_user(db, user_id)
    user.is_active = body.is_active
    db.commit()
    db.refresh(user)
    return {"message": "User status updated successfully.", "user": UserResponse.model_validate(user)}


# Lab management
@router.get("/labs", response_model=List[LabResponse])
def list_labs(db: Session = Depends(get_db)):
    return lab_service.list_labs(db)


@router.post("/labs", response_model=LabResponse, status_code=status.HTTP_201_CREATED)
def create_lab(lab: LabCreate, db: Session = Depends(get_db)):
    return lab_service.create_lab(db, lab)


@router.put("/labs/{lab_id}", response_model=LabResponse)
def update_lab(lab_id: int, lab_update: LabUpdate, db: Session = Depends(get_db)):
    """Merge the provided fields into an existing lab"""
    return lab_service.update_lab(db, lab_id, lab_update)


@router.delete("/labs/{lab_id}")
def delete_lab(lab_id: int, db: Session = Depends(get_db)):
    """Delete a lab; refused while a timetable still references it"""
    lab_service.delete_lab(db, lab_id)
    return {"message": "Lab deleted successfully."}

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List
from ..database import get_db
from ..schemas.timetable import (
    TIME_SLOTS, WEEKDAYS, SlotTable, TimetableCreate, TimetableResponse, TimetableUpdate
)
from ..core.permissions import require_admin, require_user_or_admin
from ..services import timetables as timetable_service

router = APIRouter(
    prefix="/api/timetable",
    tags=["timetable"],
    dependencies=[Depends(require_user_or_admin)],
)


@router.get("", response_model=List[TimetableResponse])
def get_timetables(db: Session = Depends(get_db)):
    """All timetables with their labs, newest first"""
    return [
        TimetableResponse.model_validate(timetable)
        for timetable in timetable_service.list_timetables(db)
    ]


@router.get("/slots", response_model=SlotTable)
def get_slot_table():
    """The weekday and period grid timetables are edited against"""
    return SlotTable(days=WEEKDAYS, time_slots=TIME_SLOTS)


@router.get("/lab/{lab_id}", response_model=TimetableResponse, response_model_exclude_none=True)
def get_timetable_for_lab(lab_id: int, db: Session = Depends(get_db)):
    """A lab without a timetable yields ``{"labId": lab_id, "schedule": []}`` so clients can start one."""
    timetable = timetable_service.get_timetable_for_lab(db, lab_id)
    if timetable is None:
        return TimetableResponse(lab_id=lab_id, schedule=[])
    return TimetableResponse.model_validate(timetable)


@router.post(
    "",
    response_model=TimetableResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_admin)],
)
def create_timetable(timetable: TimetableCreate, db: Session = Depends(get_db)):
    return TimetableResponse.model_validate(timetable_service.create_timetable(db, timetable))


@router.put("/{timetable_id}", response_model=TimetableResponse, dependencies=[Depends(require_admin)])
def update_timetable(timetable_id: int, timetable_update: TimetableUpdate, db: Session = Depends(get_db)):
    return TimetableResponse.model_validate(
        timetable_service.update_timetable(db, timetable_id, timetable_update)
    )


@router.delete("/{timetable_id}", dependencies=[Depends(require_admin)])
def delete_timetable(timetable_id: int, db: Session = Depends(get_db)):
    timetable_service.delete_timetable(db, timetable_id)
    return {"message": "Timetable deleted successfully."}

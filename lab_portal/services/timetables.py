import logging
from typing import Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload
from ..core.exceptions import Conflict, NotFound, ValidationFailed
from ..models.lab import Lab
from ..models.timetable import Timetable
from ..schemas.timetable import TimetableCreate, TimetableUpdate

logger = logging.getLogger(__name__)

DUPLICATE_MESSAGE = "Timetable already exists for this lab. Use PUT to update."


def dump_schedule(schedule) -> list:
    return [day.model_dump(mode="json", by_alias=True) for day in schedule]


def list_timetables(db: Session):
    return (
        db.query(Timetable)
        .options(joinedload(Timetable.lab))
        .order_by(Timetable.created_at.desc(), Timetable.id.desc())
        .all()
    )


def get_timetable_for_lab(db: Session, lab_id: int) -> Optional[Timetable]:
    """The lab's timetable, or None; callers render None as an empty schedule for that lab."""
    return (
        db.query(Timetable)
        .options(joinedload(Timetable.lab))
        .filter(Timetable.lab_id == lab_id)
        .first()
    )


def get_timetable(db: Session, timetable_id: int) -> Timetable:
    timetable = db.query(Timetable).filter(Timetable.id == timetable_id).first()
    if not timetable:
        raise NotFound("Timetable not found.")
    return timetable


def _commit_unique(db: Session):
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise Conflict(DUPLICATE_MESSAGE)


def create_timetable(db: Session, timetable: TimetableCreate) -> Timetable:
    if not db.query(Lab).filter(Lab.id == timetable.lab_id).first():
        raise NotFound("Lab not found.")
    if db.query(Timetable).filter(Timetable.lab_id == timetable.lab_id).first():
        raise Conflict(DUPLICATE_MESSAGE)

    db_timetable = Timetable(
        lab_id=timetable.lab_id,
        lab_name=timetable.lab_name,
        schedule=dump_schedule(timetable.schedule),
    )
    db.add(db_timetable)
    _commit_unique(db)
    db.refresh(db_timetable)
    logger.info("Created timetable %s for lab %s", db_timetable.id, db_timetable.lab_id)
    return db_timetable


def update_timetable(db: Session, timetable_id: int, timetable_update: TimetableUpdate) -> Timetable:
    db_timetable = get_timetable(db, timetable_id)
    changes = timetable_update.model_dump(exclude_unset=True)
    if any(value is None for value in changes.values()):
        raise ValidationFailed("labId, labName and schedule cannot be null.")

    if "lab_id" in changes and changes["lab_id"] != db_timetable.lab_id:
        if not db.query(Lab).filter(Lab.id == changes["lab_id"]).first():
            raise NotFound("Lab not found.")
        db_timetable.lab_id = changes["lab_id"]
    if "lab_name" in changes:
        db_timetable.lab_name = changes["lab_name"]
    if "schedule" in changes:
        db_timetable.schedule = dump_schedule(timetable_update.schedule)

    _commit_unique(db)
    db.refresh(db_timetable)
    logger.info("Updated timetable %s", db_timetable.id)
    return db_timetable


def delete_timetable(db: Session, timetable_id: int) -> None:
    db_timetable = get_timetable(db, timetable_id)
    db.delete(db_timetable)
    db.commit()
    logger.info("Deleted timetable %s", timetable_id)


def count_booked_slots(db: Session, weekday: str) -> int:
    """Slots marked unavailable on the given weekday, across all timetables."""
    booked = 0
    for schedule, in db.query(Timetable.schedule).all():
        for entry in schedule or []:
            if entry.get("day") != weekday:
                continue
            booked += sum(1 for slot in entry.get("timeSlots", []) if slot.get("isAvailable") is False)
    return booked

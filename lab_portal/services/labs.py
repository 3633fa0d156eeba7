import logging
from pydantic.alias_generators import to_camel
from sqlalchemy.orm import Session
from ..core.exceptions import HasDependents, NotFound, ValidationFailed
from ..models.lab import Lab
from ..models.timetable import Timetable
from ..schemas.lab import LabCreate, LabUpdate

logger = logging.getLogger(__name__)


def newest_first(query):
    return query.order_by(Lab.created_at.desc(), Lab.id.desc())


def list_labs(db: Session):
    return newest_first(db.query(Lab)).all()


def list_labs_by_type(db: Session, lab_type: str):
    return newest_first(db.query(Lab).filter(Lab.lab_type == lab_type)).all()


def get_lab(db: Session, lab_id: int) -> Lab:
    lab = db.query(Lab).filter(Lab.id == lab_id).first()
    if not lab:
        raise NotFound("Lab not found.")
    return lab


def create_lab(db: Session, lab: LabCreate) -> Lab:
    db_lab = Lab(**lab.model_dump())
    db.add(db_lab)
    db.commit()
    db.refresh(db_lab)
    logger.info("Created lab %s (%s)", db_lab.id, db_lab.lab_name)
    return db_lab


def update_lab(db: Session, lab_id: int, lab_update: LabUpdate) -> Lab:
    db_lab = get_lab(db, lab_id)
    changes = lab_update.model_dump(exclude_unset=True)
    for field, value in changes.items():
        if value is None:
            raise ValidationFailed(f"{to_camel(field)} cannot be null.")
        setattr(db_lab, field, value)

    db.commit()
    db.refresh(db_lab)
    logger.info("Updated lab %s: %s", db_lab.id, ", ".join(sorted(changes)) or "no fields")
    return db_lab


def delete_lab(db: Session, lab_id: int) -> None:
    db_lab = get_lab(db, lab_id)
    if db.query(Timetable).filter(Timetable.lab_id == lab_id).count() > 0:
        raise HasDependents(
            "Cannot delete lab with existing timetables. Please delete associated timetables first."
        )
    db.delete(db_lab)
    db.commit()
    logger.info("Deleted lab %s", lab_id)

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from ..database import get_db
from ..schemas.lab import LabResponse
from ..core.permissions import require_user_or_admin
from ..services import labs as lab_service

router = APIRouter(
    prefix="/api/labs",
    tags=["labs"],
    dependencies=[Depends(require_user_or_admin)],
)


@router.get("", response_model=List[LabResponse])
def get_labs(db: Session = Depends(get_db)):
    """All labs, newest first"""
    return lab_service.list_labs(db)


@router.get("/type/{lab_type}", response_model=List[LabResponse])
def get_labs_by_type(lab_type: str, db: Session = Depends(get_db)):
    """Labs with the given type tag, e.g. 'S' or 'A'"""
    return lab_service.list_labs_by_type(db, lab_type)


@router.get("/{lab_id}", response_model=LabResponse)
def get_lab(lab_id: int, db: Session = Depends(get_db)):
    return lab_service.get_lab(db, lab_id)

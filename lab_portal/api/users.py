from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List
from ..database import get_db
from ..schemas.lab import LabResponse, LabSummary
from ..schemas.user import ProfileUpdate, UserResponse
from ..core.permissions import require_user
from ..core.principal import UserPrincipal
from ..services import labs as lab_service

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("/profile", response_model=UserResponse)
def get_profile(principal: UserPrincipal = Depends(require_user)):
    return principal.user


@router.put("/profile")
def update_profile(
    profile: ProfileUpdate,
    principal: UserPrincipal = Depends(require_user),
    db: Session = Depends(get_db)
):
    """Update name/department; email and password are not editable here"""
    user = principal.user
    for field, value in profile.model_dump(exclude_unset=True).items():
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    return {"message": "Profile updated successfully.", "user": UserResponse.model_validate(user)}


@router.get("/labs", response_model=List[LabSummary], dependencies=[Depends(require_user)])
def get_labs(db: Session = Depends(get_db)):
    return lab_service.list_labs(db)


@router.get("/labs/{lab_id}", response_model=LabResponse, dependencies=[Depends(require_user)])
def get_lab(lab_id: int, db: Session = Depends(get_db)):
    return lab_service.get_lab(db, lab_id)

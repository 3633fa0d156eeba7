from pydantic import Field
from typing import Optional
from datetime import datetime
from .base import CamelModel


class LabBase(CamelModel):
    lab_name: str = Field(..., min_length=1, max_length=150)
    department: str = Field(..., min_length=1, max_length=150)
    location: str = Field(..., min_length=1, max_length=150)
    capacity: int = Field(..., ge=1)
    equipments: str = Field(..., min_length=1)
    available_system: int = Field(..., ge=0)
    working_system: int = Field(..., ge=0)
    incharge: str = Field(..., min_length=1, max_length=100)
    technician: str = Field(..., min_length=1, max_length=100)
    software: str = Field(..., min_length=1)
    specifications: str = Field(..., min_length=1)
    lab_type: str = Field(..., min_length=1, max_length=20)


class LabCreate(LabBase):
    pass


class LabUpdate(CamelModel):
    """Partial update: only the fields present in the request are applied."""
    lab_name: Optional[str] = Field(None, min_length=1, max_length=150)
    department: Optional[str] = Field(None, min_length=1, max_length=150)
    location: Optional[str] = Field(None, min_length=1, max_length=150)
    capacity: Optional[int] = Field(None, ge=1)
    equipments: Optional[str] = Field(None, min_length=1)
    available_system: Optional[int] = Field(None, ge=0)
    working_system: Optional[int] = Field(None, ge=0)
    incharge: Optional[str] = Field(None, min_length=1, max_length=100)
    technician: Optional[str] = Field(None, min_length=1, max_length=100)
    software: Optional[str] = Field(None, min_length=1)
    specifications: Optional[str] = Field(None, min_length=1)
    lab_type: Optional[str] = Field(None, min_length=1, max_length=20)


class LabResponse(LabBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class LabSummary(CamelModel):
    id: int
    lab_name: str
    department: str
    location: str
    capacity: int
    equipments: str

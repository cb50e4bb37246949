from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from herdcycle.domain.models.animal import AdultType, CalfGender, CalfStatus


class CalfResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    breed: str | None
    birth_date: datetime | None
    gender: CalfGender | None
    status: CalfStatus
    notes: str | None
    mother_number: str | None
    mother_name: str | None
    sire_number: str | None
    sire_name: str | None
    graduated: bool
    graduated_at: datetime | None
    adult_type: AdultType | None
    adult_id: UUID | None


class MaturityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    target_date: datetime
    days_left: int
    ready: bool


class CalfMaturityResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    calf: CalfResponse
    graduation: MaturityResponse | None
    weaning: MaturityResponse | None


class GraduateRequest(BaseModel):
    forced: bool = False


class AdultRef(BaseModel):
    id: UUID
    type: AdultType


class GraduationResponse(BaseModel):
    calf: CalfResponse
    adult: AdultRef


class GraduateDueResponse(BaseModel):
    promoted: int
    adult_ids: list[UUID]

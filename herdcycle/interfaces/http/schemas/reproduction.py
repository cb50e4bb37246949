from __future__ import annotations

from datetime import date, datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from herdcycle.domain.value_objects.repro_state import ReproState


class InseminationCreate(BaseModel):
    service_date: datetime | None = None
    forced: bool = False
    notes: str | None = None


class InseminationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    cow_id: UUID
    service_date: datetime
    confirmed_pregnant: bool
    failed: bool
    forced: bool
    notes: str | None
    created_at: datetime
    updated_at: datetime
    version: int


class CowResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    number: str | None
    name: str | None
    breed: str | None
    birth_date: date | None
    last_calving: datetime | None
    notes: str | None
    mother_number: str | None
    mother_name: str | None
    sire_number: str | None
    sire_name: str | None
    version: int


class ReproInfoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: ReproState
    gestation_days: int
    latest: InseminationResponse | None
    records_count: int
    conception_date: datetime | None
    est_calving: datetime | None
    dry_off_date: datetime | None
    change_feed_date: datetime | None
    retry_window_end: datetime | None
    next_insemination_earliest: datetime | None
    can_add_insemination_now: bool
    can_retry_now: bool
    can_confirm_now: bool
    days_until_retry_window_end: int | None
    days_until_calving: int | None
    days_until_dry_off: int | None
    days_until_change_feed: int | None
    days_until_latest_insemination: int | None
    days_until_last_calving: int | None
    days_until_conception: int | None
    days_until_next_insemination_earliest: int | None


class CowReproductionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cow: CowResponse
    reproduction: ReproInfoResponse
    inseminations: list[InseminationResponse]
    override: bool = False


class NewbornCalfCreate(BaseModel):
    gender: str
    name: str | None = None
    breed: str | None = None
    birth_date: datetime | None = None
    status: str | None = None
    mother_number: str | None = None
    sire_number: str | None = None
    general_notes: str | None = None


class CalvingCreate(BaseModel):
    calved_at: datetime | None = None
    notes: str | None = None
    calf: NewbornCalfCreate | None = None


class AuditEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    cow_id: UUID
    insemination_id: UUID | None
    action: str
    actor: str
    actor_user_id: UUID | None
    payload: dict[str, Any]
    at: datetime


class CalvingChangeResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    cow: CowResponse
    audit_id: UUID


class InseminationDeletedResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    deleted_id: UUID
    audit_id: UUID

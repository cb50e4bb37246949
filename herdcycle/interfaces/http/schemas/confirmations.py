from __future__ import annotations

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class ConfirmationCreate(BaseModel):
    entity_type: str
    entity_id: UUID
    type: str
    when: datetime
    alert_on: datetime | None = None
    note: str | None = None


class ConfirmationResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    entity_type: str
    entity_id: UUID
    type: str
    when: datetime
    alert_on: datetime | None
    note: str | None
    undone: bool
    created_at: datetime
    updated_at: datetime


class NamedConfirmationResponse(ConfirmationResponse):
    entity_name: str

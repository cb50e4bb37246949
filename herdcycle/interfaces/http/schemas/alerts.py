from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict

from herdcycle.domain.models.milestone import EntityType, MilestoneType


class EntityRefResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: EntityType
    id: UUID
    name: str


class MilestoneResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    entity: EntityRefResponse
    type: MilestoneType
    label: str
    when: datetime
    alert_date: datetime
    meta: dict[str, Any] = {}


class DayBucketResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: datetime
    items: list[MilestoneResponse]


class MonthDayResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    day: int
    items: list[MilestoneResponse]


class MonthViewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    month: int
    days: list[MonthDayResponse]


class CalendarViewResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    week: list[DayBucketResponse]
    week_alerts: list[DayBucketResponse]
    month: MonthViewResponse
    month_due: MonthViewResponse
    past_due: list[MilestoneResponse]

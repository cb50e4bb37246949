from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Mapping
from uuid import UUID


class MilestoneType(str, Enum):
    CALVING = "calving"
    DRY_OFF = "dryOff"
    CHANGE_FEED = "changeFeed"
    PREGNANCY_CHECK = "pregnancyCheck"
    INSEMINATION = "insemination"
    GRADUATION = "graduation"
    WEANING = "weaning"


class EntityType(str, Enum):
    COW = "cow"
    BULL = "bull"
    CALF = "calf"


@dataclass(slots=True, frozen=True)
class EntityRef:
    type: EntityType
    id: UUID
    name: str


@dataclass(slots=True, frozen=True)
class MilestoneEvent:
    """A projected, dated task for one animal. Derived on every query, never stored."""

    entity: EntityRef
    type: MilestoneType
    label: str
    when: datetime
    alert_date: datetime
    meta: Mapping[str, Any] = field(default_factory=dict)

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any
from uuid import UUID, uuid4


class AuditAction(str, Enum):
    INSEMINATION_ADD = "insemination.add"
    INSEMINATION_FORCED = "insemination.forced"
    INSEMINATION_CONFIRM = "insemination.confirm"
    INSEMINATION_UNCONFIRM = "insemination.unconfirm"
    INSEMINATION_FAIL = "insemination.fail"
    INSEMINATION_DELETE = "insemination.delete"
    INSEMINATION_RESTORE = "insemination.restore"
    CALVING_SET = "cow.calving.set"
    CALVING_CLEAR = "cow.calving.clear"
    CALVING_RESTORE = "cow.calving.restore"
    CALF_GRADUATE = "calf.graduate"


class AuditActor(str, Enum):
    USER = "user"
    OVERRIDE = "override"
    SYSTEM = "system"


@dataclass(slots=True)
class AuditEntry:
    id: UUID
    tenant_id: UUID
    cow_id: UUID
    action: str
    actor: str = AuditActor.USER.value
    actor_user_id: UUID | None = None
    insemination_id: UUID | None = None
    payload: dict[str, Any] = field(default_factory=dict)
    at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        tenant_id: UUID,
        cow_id: UUID,
        action: AuditAction,
        actor: AuditActor = AuditActor.USER,
        actor_user_id: UUID | None = None,
        insemination_id: UUID | None = None,
        payload: dict[str, Any] | None = None,
    ) -> AuditEntry:
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            cow_id=cow_id,
            action=action.value,
            actor=actor.value,
            actor_user_id=actor_user_id,
            insemination_id=insemination_id,
            payload=payload or {},
        )

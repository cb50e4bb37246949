from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from herdcycle.application.errors import NotFound, ValidationError
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.confirmation import Confirmation
from herdcycle.domain.models.milestone import EntityType, MilestoneType
from herdcycle.utils.datetime_tz import ensure_aware


@dataclass(slots=True)
class CreateConfirmationInput:
    entity_type: str
    entity_id: UUID
    type: str
    when: datetime
    alert_on: datetime | None = None
    note: str | None = None


async def execute(
    uow: UnitOfWork, tenant_id: UUID, payload: CreateConfirmationInput
) -> Confirmation:
    try:
        entity_type = EntityType(payload.entity_type)
    except ValueError as exc:
        raise ValidationError(f"Invalid entity type: {payload.entity_type}") from exc
    try:
        milestone_type = MilestoneType(payload.type)
    except ValueError as exc:
        raise ValidationError(f"Invalid milestone type: {payload.type}") from exc

    repo = {
        EntityType.COW: uow.cows,
        EntityType.BULL: uow.bulls,
        EntityType.CALF: uow.calves,
    }[entity_type]
    if await repo.get(tenant_id, payload.entity_id) is None:
        raise NotFound(f"{entity_type.value.capitalize()} {payload.entity_id} not found")

    # Duplicates are accepted; any active row suppresses the milestone
    confirmation = Confirmation.create(
        tenant_id=tenant_id,
        entity_type=entity_type.value,
        entity_id=payload.entity_id,
        type=milestone_type.value,
        when=ensure_aware(payload.when),
        alert_on=ensure_aware(payload.alert_on) if payload.alert_on else None,
        note=payload.note,
    )
    return await uow.confirmations.add(confirmation)

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from uuid import UUID

from herdcycle.application.errors import ValidationError
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.confirmation import Confirmation
from herdcycle.domain.models.milestone import EntityType


@dataclass(slots=True)
class NamedConfirmation:
    confirmation: Confirmation
    entity_name: str


async def execute(
    uow: UnitOfWork, tenant_id: UUID, date_from: date, date_to: date
) -> list[NamedConfirmation]:
    """Active confirmations dated within [date_from, date_to], with entity display names."""
    if date_to < date_from:
        raise ValidationError("date_to must not be before date_from")
    start = datetime.combine(date_from, time.min, tzinfo=timezone.utc)
    end = datetime.combine(date_to, time.max, tzinfo=timezone.utc)
    items = await uow.confirmations.list_active_between(tenant_id, start, end)

    ids: dict[str, set[UUID]] = {t.value: set() for t in EntityType}
    for item in items:
        ids.setdefault(item.entity_type, set()).add(item.entity_id)

    names: dict[tuple[str, UUID], str] = {}
    repos = {
        EntityType.COW.value: uow.cows,
        EntityType.BULL.value: uow.bulls,
        EntityType.CALF.value: uow.calves,
    }
    for entity_type, repo in repos.items():
        if not ids[entity_type]:
            continue
        found = await repo.names_by_ids(tenant_id, ids[entity_type])
        names.update({(entity_type, k): v for k, v in found.items()})

    return [
        NamedConfirmation(
            confirmation=item,
            entity_name=names.get((item.entity_type, item.entity_id), ""),
        )
        for item in items
    ]

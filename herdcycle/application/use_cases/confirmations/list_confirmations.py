from __future__ import annotations

from uuid import UUID

from herdcycle.application.errors import ValidationError
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.confirmation import Confirmation
from herdcycle.domain.models.milestone import EntityType


async def execute(
    uow: UnitOfWork, tenant_id: UUID, entity_type: str, entity_id: UUID
) -> list[Confirmation]:
    """Every confirmation for one entity, undone ones included, newest first."""
    try:
        EntityType(entity_type)
    except ValueError as exc:
        raise ValidationError(f"Invalid entity type: {entity_type}") from exc
    items = await uow.confirmations.list_for_entity(tenant_id, entity_type, entity_id)
    return sorted(items, key=lambda c: c.created_at, reverse=True)

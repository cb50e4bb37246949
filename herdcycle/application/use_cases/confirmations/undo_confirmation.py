from __future__ import annotations

from uuid import UUID

from herdcycle.application.errors import NotFound
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.confirmation import Confirmation


async def execute(uow: UnitOfWork, tenant_id: UUID, confirmation_id: UUID) -> Confirmation:
    confirmation = await uow.confirmations.get(tenant_id, confirmation_id)
    if confirmation is None:
        raise NotFound(f"Confirmation {confirmation_id} not found")
    if confirmation.undone:
        return confirmation
    confirmation.undo()
    return await uow.confirmations.update(confirmation)

from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from herdcycle.application.errors import ConflictError, NotFound, OverrideRequired
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.animal import Cow
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor, AuditEntry


@dataclass(slots=True)
class CalvingChangeOutput:
    cow: Cow
    audit_id: UUID


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    cow_id: UUID,
    *,
    override: bool = False,
    actor_user_id: UUID | None = None,
) -> CalvingChangeOutput:
    """Remove a wrongly entered calving date; the audit entry keeps it for restore."""
    if not override:
        raise OverrideRequired("Override required to clear a calving")

    cow = await uow.cows.get(tenant_id, cow_id)
    if cow is None:
        raise NotFound(f"Cow {cow_id} not found")
    if cow.last_calving is None:
        raise ConflictError("Cow has no calving date to clear")

    previous = cow.last_calving
    cow.clear_calving()
    updated = await uow.cows.update(cow)
    entry = await uow.audit_log.add(
        AuditEntry.create(
            tenant_id=tenant_id,
            cow_id=cow.id,
            action=AuditAction.CALVING_CLEAR,
            actor=AuditActor.OVERRIDE,
            actor_user_id=actor_user_id,
            payload={"from": previous.isoformat(), "to": None},
        )
    )
    return CalvingChangeOutput(cow=updated, audit_id=entry.id)

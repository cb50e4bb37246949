from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from herdcycle.application.errors import ConflictError, NotFound, OverrideRequired
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor, AuditEntry
from herdcycle.domain.services.reproduction import sort_latest_first


@dataclass(slots=True)
class DeleteInseminationOutput:
    deleted_id: UUID
    audit_id: UUID


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    cow_id: UUID,
    insemination_id: UUID,
    *,
    override: bool = False,
    actor_user_id: UUID | None = None,
) -> DeleteInseminationOutput:
    """Delete the cow's latest attempt, keeping a snapshot in the audit trail.

    Older attempts stay untouched so the history before the latest one
    cannot be rewritten.
    """
    if not override:
        raise OverrideRequired("Override required to delete an attempt")

    cow = await uow.cows.get(tenant_id, cow_id)
    if cow is None:
        raise NotFound(f"Cow {cow_id} not found")
    attempts = sort_latest_first(cow, await uow.inseminations.list(tenant_id, cow.id))
    if not attempts:
        raise NotFound("No attempts recorded")
    latest = attempts[0]
    if latest.id != insemination_id:
        raise ConflictError(
            "Only the latest attempt may be deleted",
            details={"latest_id": str(latest.id)},
        )

    await uow.inseminations.delete(latest)
    entry = await uow.audit_log.add(
        AuditEntry.create(
            tenant_id=tenant_id,
            cow_id=cow.id,
            action=AuditAction.INSEMINATION_DELETE,
            actor=AuditActor.OVERRIDE,
            actor_user_id=actor_user_id,
            insemination_id=latest.id,
            payload={"snapshot": latest.snapshot()},
        )
    )
    return DeleteInseminationOutput(deleted_id=latest.id, audit_id=entry.id)

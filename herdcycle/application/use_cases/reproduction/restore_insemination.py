from __future__ import annotations

from uuid import UUID

from herdcycle.application.errors import NotFound, OverrideRequired
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor, AuditEntry
from herdcycle.domain.models.insemination import Insemination


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    cow_id: UUID,
    audit_id: UUID,
    *,
    override: bool = False,
    actor_user_id: UUID | None = None,
) -> Insemination:
    if not override:
        raise OverrideRequired("Override required to restore an attempt")

    cow = await uow.cows.get(tenant_id, cow_id)
    if cow is None:
        raise NotFound(f"Cow {cow_id} not found")
    source = await uow.audit_log.get(tenant_id, audit_id)
    snapshot = source.payload.get("snapshot") if source is not None else None
    if (
        source is None
        or source.cow_id != cow.id
        or source.action != AuditAction.INSEMINATION_DELETE.value
        or not snapshot
    ):
        raise NotFound(f"Restore snapshot {audit_id} not found")

    restored = await uow.inseminations.add(Insemination.from_snapshot(tenant_id, cow.id, snapshot))
    await uow.audit_log.add(
        AuditEntry.create(
            tenant_id=tenant_id,
            cow_id=cow.id,
            action=AuditAction.INSEMINATION_RESTORE,
            actor=AuditActor.OVERRIDE,
            actor_user_id=actor_user_id,
            insemination_id=restored.id,
            payload={"from_audit": str(source.id)},
        )
    )
    return restored

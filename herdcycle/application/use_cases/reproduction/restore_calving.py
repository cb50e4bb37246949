from __future__ import annotations

from uuid import UUID

from herdcycle.application.errors import NotFound, OverrideRequired
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.reproduction.clear_calving import CalvingChangeOutput
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor, AuditEntry
from herdcycle.utils.datetime_tz import ensure_aware, parse_datetime

RESTORABLE_ACTIONS = {AuditAction.CALVING_SET.value, AuditAction.CALVING_CLEAR.value}


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    cow_id: UUID,
    audit_id: UUID,
    *,
    override: bool = False,
    actor_user_id: UUID | None = None,
) -> CalvingChangeOutput:
    """Put back the calving date a set or clear entry replaced.

    Restoring a `cow.calving.set` undoes the new date; restoring a
    `cow.calving.clear` brings the cleared date back.
    """
    if not override:
        raise OverrideRequired("Override required to restore a calving")

    cow = await uow.cows.get(tenant_id, cow_id)
    if cow is None:
        raise NotFound(f"Cow {cow_id} not found")
    source = await uow.audit_log.get(tenant_id, audit_id)
    if source is None or source.cow_id != cow.id or source.action not in RESTORABLE_ACTIONS:
        raise NotFound(f"Calving audit entry {audit_id} not found")

    current = cow.last_calving
    restored_value = source.payload.get("from")
    if restored_value:
        cow.record_calving(ensure_aware(parse_datetime(restored_value)))
    else:
        cow.clear_calving()
    updated = await uow.cows.update(cow)

    entry = await uow.audit_log.add(
        AuditEntry.create(
            tenant_id=tenant_id,
            cow_id=cow.id,
            action=AuditAction.CALVING_RESTORE,
            actor=AuditActor.OVERRIDE,
            actor_user_id=actor_user_id,
            payload={
                "from_audit": str(source.id),
                "from": current.isoformat() if current else None,
                "to": updated.last_calving.isoformat() if updated.last_calving else None,
            },
        )
    )
    return CalvingChangeOutput(cow=updated, audit_id=entry.id)

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from herdcycle.application.errors import NotFound, OverrideRequired, ValidationError
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.settings import get_timing_config
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor, AuditEntry
from herdcycle.domain.models.insemination import Insemination
from herdcycle.utils.datetime_tz import add_days, ensure_aware, utcnow


@dataclass(slots=True)
class RecordInseminationInput:
    cow_id: UUID
    service_date: datetime | None = None
    forced: bool = False
    notes: str | None = None


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    payload: RecordInseminationInput,
    *,
    override: bool = False,
    actor_user_id: UUID | None = None,
) -> Insemination:
    if payload.forced and not override:
        raise OverrideRequired("Override required for forced attempt")

    cow = await uow.cows.get(tenant_id, payload.cow_id)
    if cow is None:
        raise NotFound(f"Cow {payload.cow_id} not found")

    service_date = ensure_aware(payload.service_date or utcnow())
    if not payload.forced and cow.last_calving is not None:
        config = await get_timing_config.execute(uow, tenant_id)
        earliest = add_days(
            ensure_aware(cow.last_calving), config.postpartum_insemination_start_days
        )
        if service_date < earliest:
            raise ValidationError(
                "Too early after last calving",
                code="postpartum_window",
                details={"earliest": earliest.isoformat()},
            )

    insemination = Insemination.create(
        tenant_id=tenant_id,
        cow_id=cow.id,
        service_date=service_date,
        forced=payload.forced,
        notes=payload.notes,
    )
    created = await uow.inseminations.add(insemination)
    await uow.audit_log.add(
        AuditEntry.create(
            tenant_id=tenant_id,
            cow_id=cow.id,
            action=AuditAction.INSEMINATION_FORCED if payload.forced else AuditAction.INSEMINATION_ADD,
            actor=AuditActor.OVERRIDE if payload.forced else AuditActor.USER,
            actor_user_id=actor_user_id,
            insemination_id=created.id,
            payload={"date": service_date.isoformat(), "notes": payload.notes or ""},
        )
    )
    return created

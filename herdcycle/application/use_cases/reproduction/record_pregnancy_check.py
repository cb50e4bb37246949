from __future__ import annotations

from datetime import datetime
from enum import Enum
from uuid import UUID

from herdcycle.application.errors import NotFound, OverrideRequired
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.settings import get_timing_config
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor, AuditEntry
from herdcycle.domain.models.insemination import Insemination
from herdcycle.utils.datetime_tz import add_days, ensure_aware, utcnow


class PregnancyCheckResult(str, Enum):
    CONFIRM = "confirm"
    UNCONFIRM = "unconfirm"
    FAIL = "fail"


_AUDIT_ACTIONS = {
    PregnancyCheckResult.CONFIRM: AuditAction.INSEMINATION_CONFIRM,
    PregnancyCheckResult.UNCONFIRM: AuditAction.INSEMINATION_UNCONFIRM,
    PregnancyCheckResult.FAIL: AuditAction.INSEMINATION_FAIL,
}


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    cow_id: UUID,
    insemination_id: UUID,
    result: PregnancyCheckResult,
    *,
    override: bool = False,
    actor_user_id: UUID | None = None,
    now: datetime | None = None,
) -> Insemination:
    """Record the outcome of an attempt.

    The outcome can normally only be set once the evaluation window
    (service date + insemination interval) has elapsed; an override lifts that.
    """
    insemination = await uow.inseminations.get(tenant_id, cow_id, insemination_id)
    if insemination is None:
        raise NotFound(f"Insemination {insemination_id} not found")

    config = await get_timing_config.execute(uow, tenant_id)
    check_date = add_days(
        ensure_aware(insemination.service_date), config.insemination_interval_days
    )
    early = ensure_aware(now or utcnow()) < check_date
    if early and not override:
        raise OverrideRequired(
            "Override required until pregnancy check date",
            details={"check_date": check_date.isoformat()},
        )

    if result is PregnancyCheckResult.CONFIRM:
        insemination.confirm_pregnancy()
    elif result is PregnancyCheckResult.UNCONFIRM:
        insemination.unconfirm()
    else:
        insemination.mark_failed()
    updated = await uow.inseminations.update(insemination)

    await uow.audit_log.add(
        AuditEntry.create(
            tenant_id=tenant_id,
            cow_id=cow_id,
            action=_AUDIT_ACTIONS[result],
            actor=AuditActor.OVERRIDE if early else AuditActor.USER,
            actor_user_id=actor_user_id,
            insemination_id=insemination_id,
            payload={"date": ensure_aware(updated.service_date).isoformat()},
        )
    )
    return updated

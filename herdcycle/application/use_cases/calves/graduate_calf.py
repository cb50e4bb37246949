from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from herdcycle.application.errors import ConflictError, NotFound, OverrideRequired, ValidationError
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.settings import get_timing_config
from herdcycle.domain.models.animal import AdultType, Bull, Calf, Cow, adult_from_calf
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor, AuditEntry
from herdcycle.domain.services.maturity import is_ready_to_graduate
from herdcycle.utils.datetime_tz import utcnow

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GraduationResult:
    calf: Calf
    adult: Cow | Bull
    adult_type: AdultType


async def promote(
    uow: UnitOfWork,
    calf: Calf,
    *,
    actor: AuditActor,
    actor_user_id: UUID | None = None,
    forced: bool = False,
    now: datetime | None = None,
) -> GraduationResult:
    """Create the adult record, link the calf to it and audit on the mother cow."""
    at = now or utcnow()
    adult = adult_from_calf(calf, at=at)
    if isinstance(adult, Cow):
        adult_type = AdultType.COW
        adult = await uow.cows.add(adult)
    else:
        adult_type = AdultType.BULL
        adult = await uow.bulls.add(adult)

    calf.graduate(adult_type, adult.id, at)
    calf = await uow.calves.update(calf)

    if calf.mother_number:
        mother = await uow.cows.get_by_number(calf.tenant_id, calf.mother_number)
        if mother is not None:
            payload = {
                "calf_id": str(calf.id),
                "calf_name": calf.name or "",
                "gender": calf.gender.value if calf.gender else None,
                "adult_type": adult_type.value,
                "adult_id": str(adult.id),
            }
            if actor is not AuditActor.SYSTEM:
                payload["forced"] = forced
            await uow.audit_log.add(
                AuditEntry.create(
                    tenant_id=calf.tenant_id,
                    cow_id=mother.id,
                    action=AuditAction.CALF_GRADUATE,
                    actor=actor,
                    actor_user_id=actor_user_id,
                    payload=payload,
                )
            )
        else:
            logger.debug("Mother cow %s not found for calf %s", calf.mother_number, calf.id)

    return GraduationResult(calf=calf, adult=adult, adult_type=adult_type)


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    calf_id: UUID,
    *,
    forced: bool = False,
    override: bool = False,
    actor_user_id: UUID | None = None,
    now: datetime | None = None,
) -> GraduationResult:
    calf = await uow.calves.get(tenant_id, calf_id)
    if calf is None:
        raise NotFound(f"Calf {calf_id} not found")
    if calf.graduated:
        raise ConflictError("Calf already graduated")

    config = await get_timing_config.execute(uow, tenant_id)
    ready = is_ready_to_graduate(calf, config, now)
    if not ready:
        if not forced:
            raise ValidationError("Calf not ready for graduation")
        if not override:
            raise OverrideRequired("Override required to graduate a calf early")
    if calf.gender is None:
        raise ValidationError("Calf gender is required for graduation")

    return await promote(
        uow,
        calf,
        actor=AuditActor.OVERRIDE if forced and override else AuditActor.USER,
        actor_user_id=actor_user_id,
        forced=forced,
        now=now,
    )

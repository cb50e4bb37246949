from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from uuid import UUID

from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.calves.graduate_calf import promote
from herdcycle.application.use_cases.settings import get_timing_config
from herdcycle.domain.models.audit_entry import AuditActor
from herdcycle.domain.services.maturity import is_ready_to_graduate
from herdcycle.utils.datetime_tz import utcnow

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class GraduateDueCalvesOutput:
    promoted: int = 0
    adult_ids: list[UUID] = field(default_factory=list)


async def execute(
    uow: UnitOfWork, tenant_id: UUID, now: datetime | None = None
) -> GraduateDueCalvesOutput:
    """Graduate every alive, not yet graduated calf that has reached maturity."""
    now = now or utcnow()
    config = await get_timing_config.execute(uow, tenant_id)
    calves = await uow.calves.list(tenant_id, alive_only=True, include_graduated=False)

    result = GraduateDueCalvesOutput()
    for calf in calves:
        if not is_ready_to_graduate(calf, config, now):
            continue
        graduated = await promote(uow, calf, actor=AuditActor.SYSTEM, now=now)
        result.promoted += 1
        result.adult_ids.append(graduated.adult.id)

    logger.info("Graduated %d calves for tenant %s", result.promoted, tenant_id)
    return result

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from herdcycle.application.errors import NotFound
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.settings import get_timing_config
from herdcycle.domain.models.animal import Calf
from herdcycle.domain.services.maturity import MaturityInfo, compute_maturity, compute_weaning


@dataclass(slots=True)
class CalfMaturity:
    calf: Calf
    graduation: MaturityInfo | None
    weaning: MaturityInfo | None


async def execute(
    uow: UnitOfWork, tenant_id: UUID, calf_id: UUID, now: datetime | None = None
) -> CalfMaturity:
    calf = await uow.calves.get(tenant_id, calf_id)
    if calf is None:
        raise NotFound(f"Calf {calf_id} not found")
    config = await get_timing_config.execute(uow, tenant_id)
    return CalfMaturity(
        calf=calf,
        graduation=compute_maturity(calf, config, now),
        weaning=compute_weaning(calf, config, now),
    )

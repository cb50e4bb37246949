from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from herdcycle.application.errors import NotFound
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.settings import get_timing_config
from herdcycle.domain.models.animal import Cow
from herdcycle.domain.models.insemination import Insemination
from herdcycle.domain.services.reproduction import (
    ReproInfo,
    compute_reproductive_state,
    sort_latest_first,
)


@dataclass(slots=True)
class CowReproduction:
    cow: Cow
    reproduction: ReproInfo
    inseminations: list[Insemination]


async def execute(
    uow: UnitOfWork, tenant_id: UUID, cow_id: UUID, now: datetime | None = None
) -> CowReproduction:
    cow = await uow.cows.get(tenant_id, cow_id)
    if cow is None:
        raise NotFound(f"Cow {cow_id} not found")
    config = await get_timing_config.execute(uow, tenant_id)
    events = await uow.inseminations.list(tenant_id, cow_id=cow_id)
    return CowReproduction(
        cow=cow,
        reproduction=compute_reproductive_state(cow, config, events, now),
        inseminations=sort_latest_first(cow, events),
    )

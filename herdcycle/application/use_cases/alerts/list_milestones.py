from __future__ import annotations

from datetime import datetime
from uuid import UUID

from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.settings import get_timing_config
from herdcycle.domain.models.milestone import MilestoneEvent
from herdcycle.domain.services.confirmations import filter_active
from herdcycle.domain.services.milestones import build_milestones
from herdcycle.utils.datetime_tz import to_day, utcnow


async def load_active_milestones(
    uow: UnitOfWork, tenant_id: UUID, now: datetime | None = None
) -> list[MilestoneEvent]:
    # One session serves every read, so the snapshot is loaded sequentially
    cows = await uow.cows.list(tenant_id)
    calves = await uow.calves.list(tenant_id, alive_only=True, include_graduated=False)
    config = await get_timing_config.execute(uow, tenant_id)
    events = await uow.inseminations.list(tenant_id)
    confirmations = await uow.confirmations.list_active(tenant_id)

    milestones = build_milestones(cows, calves, config, events, now or utcnow())
    return filter_active(milestones, confirmations)


async def execute(
    uow: UnitOfWork, tenant_id: UUID, now: datetime | None = None
) -> list[MilestoneEvent]:
    milestones = await load_active_milestones(uow, tenant_id, now)
    return sorted(milestones, key=lambda m: (to_day(m.alert_date), to_day(m.when)))

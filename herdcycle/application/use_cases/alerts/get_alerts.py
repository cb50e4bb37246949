from __future__ import annotations

from datetime import datetime
from uuid import UUID

from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.application.use_cases.alerts.list_milestones import load_active_milestones
from herdcycle.domain.services.calendar_view import (
    DEFAULT_PAST_DUE_LIMIT,
    CalendarView,
    build_calendar_view,
)
from herdcycle.utils.datetime_tz import DateLike, utcnow


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    anchor: DateLike | None = None,
    *,
    now: datetime | None = None,
    past_due_limit: int = DEFAULT_PAST_DUE_LIMIT,
) -> CalendarView:
    now = now or utcnow()
    milestones = await load_active_milestones(uow, tenant_id, now)
    return build_calendar_view(
        milestones,
        anchor if anchor is not None else now,
        today=now,
        past_due_limit=past_due_limit,
    )

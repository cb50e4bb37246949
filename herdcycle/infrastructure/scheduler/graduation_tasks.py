from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import datetime
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.use_cases.calves import graduate_due_calves
from herdcycle.infrastructure.db.session import SQLAlchemyUnitOfWork
from herdcycle.utils.datetime_tz import utcnow

logger = logging.getLogger(__name__)


async def graduate_tenant(
    session_factory: Callable[[], AsyncSession],
    tenant_id: UUID,
    now: datetime | None = None,
) -> int:
    uow = SQLAlchemyUnitOfWork(session_factory)
    async with uow:
        result = await graduate_due_calves.execute(uow, tenant_id, now)
        await uow.commit()
    return result.promoted


async def graduate_due_calves_all_tenants(
    session_factory: Callable[[], AsyncSession],
    tenant_ids: list[UUID] | None = None,
    now: datetime | None = None,
) -> dict[UUID, int]:
    """Daily batch: promote every mature calf, one transaction per tenant.

    A failing tenant is logged and skipped so the remaining tenants still run.
    """
    now = now or utcnow()
    if tenant_ids is None:
        uow = SQLAlchemyUnitOfWork(session_factory)
        async with uow:
            tenant_ids = await uow.calves.tenants_with_pending_graduation()

    promoted: dict[UUID, int] = {}
    for tenant_id in tenant_ids:
        try:
            promoted[tenant_id] = await graduate_tenant(session_factory, tenant_id, now)
        except Exception as exc:
            logger.error("Calf graduation failed for tenant %s: %s", tenant_id, exc, exc_info=True)

    logger.info(
        "Calf graduation: promoted %d calves across %d tenants",
        sum(promoted.values()),
        len(promoted),
    )
    return promoted

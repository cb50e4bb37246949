from __future__ import annotations

import logging
from uuid import UUID

from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.timing_config import TimingConfig

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, tenant_id: UUID) -> TimingConfig:
    config = await uow.timing_config.get(tenant_id)
    if config is None:
        logger.debug("No timing config stored for tenant %s; using defaults", tenant_id)
        return TimingConfig.defaults(tenant_id)
    return config

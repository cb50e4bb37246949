from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.interfaces.repositories.timing_config import TimingConfigRepository
from herdcycle.domain.models.timing_config import TIMING_DEFAULTS, TimingConfig
from herdcycle.infrastructure.db.orm.timing_config import TimingConfigORM

_LEGACY_COLUMNS = ("insemination_interval_months", "weaning_days")


class TimingConfigSQLAlchemyRepository(TimingConfigRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    def _to_domain(self, orm: TimingConfigORM) -> TimingConfig:
        raw = {name: getattr(orm, name) for name in (*TIMING_DEFAULTS, *_LEGACY_COLUMNS)}
        return TimingConfig.from_mapping(raw, tenant_id=orm.tenant_id, updated_at=orm.updated_at)

    async def get(self, tenant_id: UUID) -> TimingConfig | None:
        result = await self.session.execute(
            select(TimingConfigORM).where(TimingConfigORM.tenant_id == tenant_id)
        )
        orm = result.scalar_one_or_none()
        return self._to_domain(orm) if orm else None

    async def upsert(self, config: TimingConfig) -> TimingConfig:
        orm = await self.session.get(TimingConfigORM, config.tenant_id)
        if orm is None:
            orm = TimingConfigORM(tenant_id=config.tenant_id)
            self.session.add(orm)
        for name, value in config.as_dict().items():
            setattr(orm, name, value)
        # Canonical columns now carry the migrated values
        for name in _LEGACY_COLUMNS:
            setattr(orm, name, None)
        orm.updated_at = config.updated_at
        await self.session.flush()
        return self._to_domain(orm)

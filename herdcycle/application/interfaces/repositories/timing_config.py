from __future__ import annotations

from typing import Protocol
from uuid import UUID

from herdcycle.domain.models.timing_config import TimingConfig


class TimingConfigRepository(Protocol):
    async def get(self, tenant_id: UUID) -> TimingConfig | None: ...
    async def upsert(self, config: TimingConfig) -> TimingConfig: ...

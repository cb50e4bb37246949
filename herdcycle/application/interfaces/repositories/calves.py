from __future__ import annotations

from typing import Protocol
from uuid import UUID

from herdcycle.domain.models.animal import Calf


class CalvesRepository(Protocol):
    async def add(self, calf: Calf) -> Calf: ...

    async def update(self, calf: Calf) -> Calf: ...

    async def get(self, tenant_id: UUID, calf_id: UUID) -> Calf | None: ...

    async def list(
        self,
        tenant_id: UUID,
        *,
        alive_only: bool = False,
        include_graduated: bool = True,
    ) -> list[Calf]: ...

    async def names_by_ids(self, tenant_id: UUID, ids: set[UUID]) -> dict[UUID, str]: ...

    async def tenants_with_pending_graduation(self) -> list[UUID]: ...

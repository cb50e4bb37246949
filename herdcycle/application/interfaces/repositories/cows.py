from __future__ import annotations

from typing import Protocol
from uuid import UUID

from herdcycle.domain.models.animal import Cow


class CowsRepository(Protocol):
    async def add(self, cow: Cow) -> Cow: ...

    async def update(self, cow: Cow) -> Cow: ...

    async def get(self, tenant_id: UUID, cow_id: UUID) -> Cow | None: ...

    async def get_by_number(self, tenant_id: UUID, number: str) -> Cow | None: ...

    async def list(self, tenant_id: UUID) -> list[Cow]: ...

    async def names_by_ids(self, tenant_id: UUID, ids: set[UUID]) -> dict[UUID, str]: ...

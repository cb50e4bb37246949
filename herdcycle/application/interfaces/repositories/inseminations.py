from __future__ import annotations

from typing import Protocol
from uuid import UUID

from herdcycle.domain.models.insemination import Insemination


class InseminationsRepository(Protocol):
    async def add(self, insemination: Insemination) -> Insemination: ...

    async def update(self, insemination: Insemination) -> Insemination: ...

    async def delete(self, insemination: Insemination) -> None: ...

    async def get(
        self, tenant_id: UUID, cow_id: UUID, insemination_id: UUID
    ) -> Insemination | None: ...

    async def list(self, tenant_id: UUID, cow_id: UUID | None = None) -> list[Insemination]: ...

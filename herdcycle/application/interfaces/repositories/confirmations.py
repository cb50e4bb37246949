from __future__ import annotations

from datetime import datetime
from typing import Protocol
from uuid import UUID

from herdcycle.domain.models.confirmation import Confirmation


class ConfirmationsRepository(Protocol):
    async def add(self, confirmation: Confirmation) -> Confirmation: ...

    async def update(self, confirmation: Confirmation) -> Confirmation: ...

    async def get(self, tenant_id: UUID, confirmation_id: UUID) -> Confirmation | None: ...

    async def list_active(self, tenant_id: UUID) -> list[Confirmation]: ...

    async def list_for_entity(
        self, tenant_id: UUID, entity_type: str, entity_id: UUID
    ) -> list[Confirmation]: ...

    async def list_active_between(
        self, tenant_id: UUID, start: datetime, end: datetime
    ) -> list[Confirmation]: ...

from __future__ import annotations

from typing import Protocol
from uuid import UUID

from herdcycle.domain.value_objects.role import Role


class MembershipRepository(Protocol):
    async def get_role(self, user_id: UUID, tenant_id: UUID) -> Role | None: ...

from __future__ import annotations

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.errors import PermissionDenied
from herdcycle.domain.value_objects.role import Role
from herdcycle.infrastructure.repos.memberships_sqlalchemy import MembershipsSQLAlchemyRepository

RoleResolver = Callable[[UUID, UUID], Awaitable[Role | None]]

SUPER_ADMIN_CLAIM = "super_admin"


@dataclass(slots=True)
class AuthContext:
    user_id: UUID
    tenant_id: UUID
    role: Role
    claims: dict[str, Any]

    @property
    def can_override(self) -> bool:
        return self.role.can_override()


def membership_role_resolver(
    session_factory: Callable[[], AsyncSession],
) -> RoleResolver:
    async def resolve(user_id: UUID, tenant_id: UUID) -> Role | None:
        async with session_factory() as session:
            return await MembershipsSQLAlchemyRepository(session).get_role(user_id, tenant_id)

    return resolve


async def resolve_role(
    resolver: RoleResolver, user_id: UUID, tenant_id: UUID, claims: dict[str, Any]
) -> Role:
    if claims.get(SUPER_ADMIN_CLAIM) is True:
        return Role.SUPER_ADMIN
    role = await resolver(user_id, tenant_id)
    if role is None:
        raise PermissionDenied("User does not belong to tenant")
    return role

from __future__ import annotations

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from herdcycle.application.interfaces.repositories.memberships import MembershipRepository
from herdcycle.domain.value_objects.role import Role
from herdcycle.infrastructure.db.orm.membership import MembershipORM


class MembershipsSQLAlchemyRepository(MembershipRepository):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_role(self, user_id: UUID, tenant_id: UUID) -> Role | None:
        stmt = (
            select(MembershipORM)
            .where(MembershipORM.user_id == user_id)
            .where(MembershipORM.tenant_id == tenant_id)
        )
        result = await self.session.execute(stmt)
        row = result.scalar_one_or_none()
        return row.role if row else None

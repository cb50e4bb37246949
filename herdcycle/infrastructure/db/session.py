from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from herdcycle.application.interfaces.unit_of_work import UnitOfWork

_REPOSITORIES = (
    "cows",
    "bulls",
    "calves",
    "inseminations",
    "confirmations",
    "timing_config",
    "audit_log",
    "memberships",
)


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._clear_repositories()

    def _clear_repositories(self) -> None:
        for name in _REPOSITORIES:
            setattr(self, name, None)

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from herdcycle.infrastructure.repos.audit_log_sqlalchemy import (
            AuditLogSQLAlchemyRepository,
        )
        from herdcycle.infrastructure.repos.bulls_sqlalchemy import BullsSQLAlchemyRepository
        from herdcycle.infrastructure.repos.calves_sqlalchemy import CalvesSQLAlchemyRepository
        from herdcycle.infrastructure.repos.confirmations_sqlalchemy import (
            ConfirmationsSQLAlchemyRepository,
        )
        from herdcycle.infrastructure.repos.cows_sqlalchemy import CowsSQLAlchemyRepository
        from herdcycle.infrastructure.repos.inseminations_sqlalchemy import (
            InseminationsSQLAlchemyRepository,
        )
        from herdcycle.infrastructure.repos.memberships_sqlalchemy import (
            MembershipsSQLAlchemyRepository,
        )
        from herdcycle.infrastructure.repos.timing_config_sqlalchemy import (
            TimingConfigSQLAlchemyRepository,
        )

        self.cows = CowsSQLAlchemyRepository(self.session)
        self.bulls = BullsSQLAlchemyRepository(self.session)
        self.calves = CalvesSQLAlchemyRepository(self.session)
        self.inseminations = InseminationsSQLAlchemyRepository(self.session)
        self.confirmations = ConfirmationsSQLAlchemyRepository(self.session)
        self.timing_config = TimingConfigSQLAlchemyRepository(self.session)
        self.audit_log = AuditLogSQLAlchemyRepository(self.session)
        self.memberships = MembershipsSQLAlchemyRepository(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self._clear_repositories()

    async def commit(self) -> None:
        if not self.session:
            return
        await self.session.commit()

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()

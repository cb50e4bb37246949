from __future__ import annotations

from typing import Protocol

from herdcycle.application.interfaces.repositories.audit_log import AuditLogRepository
from herdcycle.application.interfaces.repositories.bulls import BullsRepository
from herdcycle.application.interfaces.repositories.calves import CalvesRepository
from herdcycle.application.interfaces.repositories.confirmations import ConfirmationsRepository
from herdcycle.application.interfaces.repositories.cows import CowsRepository
from herdcycle.application.interfaces.repositories.inseminations import InseminationsRepository
from herdcycle.application.interfaces.repositories.memberships import MembershipRepository
from herdcycle.application.interfaces.repositories.timing_config import TimingConfigRepository


class UnitOfWork(Protocol):
    cows: CowsRepository
    bulls: BullsRepository
    calves: CalvesRepository
    inseminations: InseminationsRepository
    confirmations: ConfirmationsRepository
    timing_config: TimingConfigRepository
    audit_log: AuditLogRepository
    memberships: MembershipRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

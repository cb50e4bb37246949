from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from uuid import UUID, uuid4

from herdcycle.utils.datetime_tz import to_day

ConfirmationKey = tuple[str, UUID, str, date]


@dataclass(slots=True)
class Confirmation:
    """Acknowledgement of one dated milestone. Undo is a soft delete; rows are never removed."""

    id: UUID
    tenant_id: UUID
    entity_type: str
    entity_id: UUID
    type: str
    when: datetime
    alert_on: datetime | None = None
    note: str | None = None
    undone: bool = False
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(
        cls,
        tenant_id: UUID,
        entity_type: str,
        entity_id: UUID,
        type: str,
        when: datetime,
        alert_on: datetime | None = None,
        note: str | None = None,
    ) -> Confirmation:
        now = datetime.now(timezone.utc)
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            entity_type=entity_type,
            entity_id=entity_id,
            type=type,
            when=when,
            alert_on=alert_on,
            note=note,
            created_at=now,
            updated_at=now,
        )

    def undo(self) -> None:
        if self.undone:
            return
        self.undone = True
        self.updated_at = datetime.now(timezone.utc)

    def day_key(self) -> ConfirmationKey:
        return (self.entity_type, self.entity_id, self.type, to_day(self.when))

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping
from uuid import UUID, uuid4


@dataclass(slots=True)
class Insemination:
    id: UUID
    tenant_id: UUID
    cow_id: UUID
    service_date: datetime

    # Both flags false = pending evaluation
    confirmed_pregnant: bool = False
    failed: bool = False
    # Early attempt recorded through an override
    forced: bool = False
    notes: str | None = None

    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    version: int = 1

    @classmethod
    def create(
        cls,
        tenant_id: UUID,
        cow_id: UUID,
        service_date: datetime,
        forced: bool = False,
        notes: str | None = None,
    ) -> Insemination:
        now = datetime.now(timezone.utc)
        if service_date.tzinfo is None:
            service_date = service_date.replace(tzinfo=timezone.utc)
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            cow_id=cow_id,
            service_date=service_date,
            forced=forced,
            notes=notes,
            created_at=now,
            updated_at=now,
            version=1,
        )

    @classmethod
    def from_snapshot(cls, tenant_id: UUID, cow_id: UUID, data: Mapping[str, Any]) -> Insemination:
        """Recreate a deleted attempt as a new record carrying its old outcome."""
        service_date = datetime.fromisoformat(data["service_date"])
        insemination = cls.create(
            tenant_id,
            cow_id,
            service_date,
            forced=bool(data.get("forced")),
            notes=data.get("notes"),
        )
        insemination.confirmed_pregnant = bool(data.get("confirmed_pregnant"))
        insemination.failed = bool(data.get("failed")) and not insemination.confirmed_pregnant
        return insemination

    def snapshot(self) -> dict[str, Any]:
        return {
            "id": str(self.id),
            "service_date": self.service_date.isoformat(),
            "confirmed_pregnant": self.confirmed_pregnant,
            "failed": self.failed,
            "forced": self.forced,
            "notes": self.notes,
        }

    @property
    def is_pending(self) -> bool:
        return not self.confirmed_pregnant and not self.failed

    def confirm_pregnancy(self) -> None:
        self.confirmed_pregnant = True
        self.failed = False
        self.bump_version()

    def unconfirm(self) -> None:
        self.confirmed_pregnant = False
        self.failed = False
        self.bump_version()

    def mark_failed(self) -> None:
        self.confirmed_pregnant = False
        self.failed = True
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = datetime.now(timezone.utc)

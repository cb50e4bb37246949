from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from herdcycle.application.errors import NotFound, OverrideRequired, ValidationError
from herdcycle.application.interfaces.unit_of_work import UnitOfWork
from herdcycle.domain.models.animal import Calf, CalfGender, CalfStatus, Cow
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor, AuditEntry
from herdcycle.utils.datetime_tz import ensure_aware, utcnow


@dataclass(slots=True)
class NewbornCalfInput:
    gender: str
    name: str | None = None
    breed: str | None = None
    birth_date: datetime | None = None
    status: str | None = None
    mother_number: str | None = None
    sire_number: str | None = None
    general_notes: str | None = None


@dataclass(slots=True)
class RecordCalvingInput:
    cow_id: UUID
    calved_at: datetime | None = None
    notes: str | None = None
    calf: NewbornCalfInput | None = None


@dataclass(slots=True)
class RecordCalvingOutput:
    cow: Cow
    audit_id: UUID
    calf: Calf | None = None


async def _build_calf(
    uow: UnitOfWork,
    tenant_id: UUID,
    mother: Cow,
    calved_at: datetime,
    notes: str | None,
    data: NewbornCalfInput,
) -> Calf:
    try:
        gender = CalfGender(data.gender.lower())
    except ValueError as exc:
        raise ValidationError(f"Invalid calf gender: {data.gender}") from exc
    try:
        status = CalfStatus(data.status) if data.status else CalfStatus.ALIVE
    except ValueError:
        status = CalfStatus.ALIVE

    lineage: dict[str, str | None] = {
        "mother_number": mother.number,
        "mother_name": mother.name,
        "mother_breed": mother.breed,
    }
    if data.mother_number:
        other = await uow.cows.get_by_number(tenant_id, data.mother_number)
        if other is not None:
            lineage.update(
                mother_number=other.number or lineage["mother_number"],
                mother_name=other.name or lineage["mother_name"],
                mother_breed=other.breed or lineage["mother_breed"],
            )
        else:
            lineage["mother_number"] = data.mother_number
    if data.sire_number:
        sire = await uow.bulls.get_by_number(tenant_id, data.sire_number)
        if sire is not None:
            lineage.update(sire_number=sire.number, sire_name=sire.name, sire_breed=sire.breed)
        else:
            lineage["sire_number"] = data.sire_number

    calf_notes = "\n".join(n for n in (notes, data.general_notes) if n) or None
    return Calf.create(
        tenant_id=tenant_id,
        name=data.name or "Unnamed Calf",
        birth_date=ensure_aware(data.birth_date) if data.birth_date else calved_at,
        gender=gender,
        breed=data.breed or mother.breed or "Unknown",
        status=status,
        notes=calf_notes,
        **lineage,
    )


async def execute(
    uow: UnitOfWork,
    tenant_id: UUID,
    payload: RecordCalvingInput,
    *,
    override: bool = False,
    actor_user_id: UUID | None = None,
) -> RecordCalvingOutput:
    """Set the cow's last calving date and optionally register the newborn."""
    if not override:
        raise OverrideRequired("Override required to record a calving")

    cow = await uow.cows.get(tenant_id, payload.cow_id)
    if cow is None:
        raise NotFound(f"Cow {payload.cow_id} not found")

    calved_at = ensure_aware(payload.calved_at or utcnow())
    newborn = None
    if payload.calf is not None:
        newborn = await _build_calf(uow, tenant_id, cow, calved_at, payload.notes, payload.calf)

    previous = cow.last_calving
    cow.record_calving(calved_at)
    updated = await uow.cows.update(cow)
    calf = await uow.calves.add(newborn) if newborn is not None else None

    entry = await uow.audit_log.add(
        AuditEntry.create(
            tenant_id=tenant_id,
            cow_id=cow.id,
            action=AuditAction.CALVING_SET,
            actor=AuditActor.OVERRIDE,
            actor_user_id=actor_user_id,
            payload={
                "from": previous.isoformat() if previous else None,
                "to": calved_at.isoformat(),
                "notes": payload.notes or "",
                "calf_id": str(calf.id) if calf else None,
            },
        )
    )
    return RecordCalvingOutput(cow=updated, audit_id=entry.id, calf=calf)

from __future__ import annotations

from datetime import datetime, timezone
from uuid import uuid4

import pytest

from herdcycle.application.errors import ConflictError, NotFound, OverrideRequired, ValidationError
from herdcycle.application.use_cases.reproduction import (
    clear_calving,
    delete_latest_insemination,
    get_reproductive_state,
    list_audit,
    record_calving,
    record_insemination,
    record_pregnancy_check,
    restore_calving,
    restore_insemination,
)
from herdcycle.domain.models.animal import CalfGender
from herdcycle.domain.models.audit_entry import AuditAction, AuditActor
from herdcycle.domain.value_objects.repro_state import ReproState


def utc(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


@pytest.mark.asyncio
async def test_record_insemination_adds_attempt_and_audit(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)
    actor = uuid4()

    created = await record_insemination.execute(
        uow,
        tenant_id,
        record_insemination.RecordInseminationInput(
            cow_id=cow.id, service_date=utc(2024, 3, 1), notes="AI tech"
        ),
        actor_user_id=actor,
    )

    assert created.cow_id == cow.id
    assert created.is_pending
    assert created.forced is False
    assert list(uow.inseminations.items) == [created.id]
    (entry,) = uow.audit_log.items
    assert entry.action == AuditAction.INSEMINATION_ADD.value
    assert entry.actor == AuditActor.USER.value
    assert entry.actor_user_id == actor
    assert entry.insemination_id == created.id
    assert entry.payload["notes"] == "AI tech"


@pytest.mark.asyncio
async def test_forced_insemination_requires_override(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)

    with pytest.raises(OverrideRequired):
        await record_insemination.execute(
            uow,
            tenant_id,
            record_insemination.RecordInseminationInput(cow_id=cow.id, forced=True),
        )

    assert uow.inseminations.items == {}
    assert uow.audit_log.items == []


@pytest.mark.asyncio
async def test_insemination_inside_postpartum_window_is_rejected(uow, tenant_id, make_cow):
    cow = make_cow(last_calving=utc(2024, 1, 1))
    uow.seed(cow)

    with pytest.raises(ValidationError) as exc_info:
        await record_insemination.execute(
            uow,
            tenant_id,
            record_insemination.RecordInseminationInput(
                cow_id=cow.id, service_date=utc(2024, 1, 20)
            ),
        )

    assert exc_info.value.code == "postpartum_window"
    assert exc_info.value.details == {"earliest": utc(2024, 2, 15).isoformat()}


@pytest.mark.asyncio
async def test_forced_insemination_with_override_skips_window(uow, tenant_id, make_cow):
    cow = make_cow(last_calving=utc(2024, 1, 1))
    uow.seed(cow)

    created = await record_insemination.execute(
        uow,
        tenant_id,
        record_insemination.RecordInseminationInput(
            cow_id=cow.id, service_date=utc(2024, 1, 20), forced=True
        ),
        override=True,
    )

    assert created.forced is True
    (entry,) = uow.audit_log.items
    assert entry.action == AuditAction.INSEMINATION_FORCED.value
    assert entry.actor == AuditActor.OVERRIDE.value


@pytest.mark.asyncio
async def test_insemination_for_unknown_cow(uow, tenant_id):
    with pytest.raises(NotFound):
        await record_insemination.execute(
            uow, tenant_id, record_insemination.RecordInseminationInput(cow_id=uuid4())
        )


@pytest.mark.asyncio
async def test_pregnancy_check_before_window_requires_override(
    uow, tenant_id, make_cow, make_insemination
):
    cow = make_cow()
    attempt = make_insemination(cow, utc(2024, 1, 1))
    uow.seed(cow, attempt)

    with pytest.raises(OverrideRequired) as exc_info:
        await record_pregnancy_check.execute(
            uow,
            tenant_id,
            cow.id,
            attempt.id,
            record_pregnancy_check.PregnancyCheckResult.CONFIRM,
            now=utc(2024, 1, 10),
        )

    assert exc_info.value.details == {"check_date": utc(2024, 1, 22).isoformat()}
    assert attempt.is_pending


@pytest.mark.asyncio
async def test_early_pregnancy_check_with_override_is_audited_as_override(
    uow, tenant_id, make_cow, make_insemination
):
    cow = make_cow()
    attempt = make_insemination(cow, utc(2024, 1, 1))
    uow.seed(cow, attempt)

    updated = await record_pregnancy_check.execute(
        uow,
        tenant_id,
        cow.id,
        attempt.id,
        record_pregnancy_check.PregnancyCheckResult.CONFIRM,
        override=True,
        now=utc(2024, 1, 10),
    )

    assert updated.confirmed_pregnant is True
    assert updated.version == 2
    (entry,) = uow.audit_log.items
    assert entry.action == AuditAction.INSEMINATION_CONFIRM.value
    assert entry.actor == AuditActor.OVERRIDE.value


@pytest.mark.asyncio
async def test_pregnancy_check_after_window_is_user_action(
    uow, tenant_id, make_cow, make_insemination
):
    cow = make_cow()
    attempt = make_insemination(cow, utc(2024, 1, 1), confirmed_pregnant=True)
    uow.seed(cow, attempt)

    failed = await record_pregnancy_check.execute(
        uow,
        tenant_id,
        cow.id,
        attempt.id,
        record_pregnancy_check.PregnancyCheckResult.FAIL,
        now=utc(2024, 2, 1),
    )
    assert failed.failed is True
    assert failed.confirmed_pregnant is False

    reverted = await record_pregnancy_check.execute(
        uow,
        tenant_id,
        cow.id,
        attempt.id,
        record_pregnancy_check.PregnancyCheckResult.UNCONFIRM,
        now=utc(2024, 2, 1),
    )
    assert reverted.is_pending
    assert [e.action for e in uow.audit_log.items] == [
        AuditAction.INSEMINATION_FAIL.value,
        AuditAction.INSEMINATION_UNCONFIRM.value,
    ]
    assert {e.actor for e in uow.audit_log.items} == {AuditActor.USER.value}


@pytest.mark.asyncio
async def test_pregnancy_check_on_another_cows_attempt(uow, tenant_id, make_cow, make_insemination):
    cow = make_cow()
    other = make_cow(number="202")
    attempt = make_insemination(other, utc(2024, 1, 1))
    uow.seed(cow, other, attempt)

    with pytest.raises(NotFound):
        await record_pregnancy_check.execute(
            uow,
            tenant_id,
            cow.id,
            attempt.id,
            record_pregnancy_check.PregnancyCheckResult.CONFIRM,
            override=True,
        )


@pytest.mark.asyncio
async def test_calving_requires_override(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)

    with pytest.raises(OverrideRequired):
        await record_calving.execute(
            uow, tenant_id, record_calving.RecordCalvingInput(cow_id=cow.id)
        )

    assert cow.last_calving is None


@pytest.mark.asyncio
async def test_calving_registers_calf_with_lineage(
    uow, tenant_id, make_cow, make_bull, make_insemination
):
    cow = make_cow(breed="Holstein", last_calving=utc(2023, 1, 15))
    bull = make_bull()
    attempt = make_insemination(cow, utc(2023, 6, 1), confirmed_pregnant=True)
    uow.seed(cow, bull, attempt)

    result = await record_calving.execute(
        uow,
        tenant_id,
        record_calving.RecordCalvingInput(
            cow_id=cow.id,
            calved_at=utc(2024, 3, 10),
            notes="Easy birth",
            calf=record_calving.NewbornCalfInput(
                gender="Female", sire_number="B-7", general_notes="Healthy"
            ),
        ),
        override=True,
    )

    assert result.cow.last_calving == utc(2024, 3, 10)
    calf = result.calf
    assert calf is not None
    assert calf.gender is CalfGender.FEMALE
    assert calf.name == "Unnamed Calf"
    assert calf.breed == "Holstein"
    assert calf.birth_date == utc(2024, 3, 10)
    assert calf.notes == "Easy birth\nHealthy"
    assert (calf.mother_number, calf.mother_name) == ("101", "Bella")
    assert (calf.sire_number, calf.sire_name, calf.sire_breed) == ("B-7", "Thor", "Jersey")
    assert calf.id in uow.calves.items

    (entry,) = uow.audit_log.items
    assert entry.id == result.audit_id
    assert entry.action == AuditAction.CALVING_SET.value
    assert entry.actor == AuditActor.OVERRIDE.value
    assert entry.payload["from"] == utc(2023, 1, 15).isoformat()
    assert entry.payload["calf_id"] == str(calf.id)

    state = await get_reproductive_state.execute(uow, tenant_id, cow.id, now=utc(2024, 3, 11))
    assert state.reproduction.status is ReproState.OPEN
    assert state.reproduction.next_insemination_earliest == utc(2024, 4, 24)


@pytest.mark.asyncio
async def test_calving_keeps_unknown_sire_number(uow, tenant_id, make_cow):
    cow = make_cow(breed=None)
    uow.seed(cow)

    result = await record_calving.execute(
        uow,
        tenant_id,
        record_calving.RecordCalvingInput(
            cow_id=cow.id,
            calf=record_calving.NewbornCalfInput(gender="male", name="Rex", sire_number="X-1"),
        ),
        override=True,
    )

    assert result.calf.sire_number == "X-1"
    assert result.calf.sire_name is None
    assert result.calf.breed == "Unknown"


@pytest.mark.asyncio
async def test_calving_rejects_invalid_calf_gender(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)

    with pytest.raises(ValidationError):
        await record_calving.execute(
            uow,
            tenant_id,
            record_calving.RecordCalvingInput(
                cow_id=cow.id, calf=record_calving.NewbornCalfInput(gender="unknown")
            ),
            override=True,
        )

    assert cow.last_calving is None
    assert uow.calves.items == {}


@pytest.mark.asyncio
async def test_reproductive_state_lists_attempts_newest_first(
    uow, tenant_id, make_cow, make_insemination
):
    cow = make_cow()
    older = make_insemination(cow, utc(2024, 1, 1), failed=True)
    newer = make_insemination(cow, utc(2024, 2, 1))
    uow.seed(cow, older, newer)

    result = await get_reproductive_state.execute(uow, tenant_id, cow.id, now=utc(2024, 2, 5))

    assert [i.id for i in result.inseminations] == [newer.id, older.id]
    assert result.reproduction.status is ReproState.PENDING
    assert result.reproduction.retry_window_end == utc(2024, 2, 22)


@pytest.mark.asyncio
async def test_reproductive_state_for_unknown_cow(uow, tenant_id):
    with pytest.raises(NotFound):
        await get_reproductive_state.execute(uow, tenant_id, uuid4())


@pytest.mark.asyncio
async def test_list_audit_is_scoped_to_cow(uow, tenant_id, make_cow):
    cow = make_cow()
    other = make_cow(number="202")
    uow.seed(cow, other)
    for target in (cow, other):
        await record_insemination.execute(
            uow,
            tenant_id,
            record_insemination.RecordInseminationInput(cow_id=target.id),
        )

    entries = await list_audit.execute(uow, tenant_id, cow.id)

    assert len(entries) == 1
    assert entries[0].cow_id == cow.id

    with pytest.raises(NotFound):
        await list_audit.execute(uow, tenant_id, uuid4())


async def _state(uow, tenant_id, cow, now):
    result = await get_reproductive_state.execute(uow, tenant_id, cow.id, now=now)
    return result.reproduction.status


@pytest.mark.asyncio
async def test_cleared_calving_can_be_restored_from_audit(
    uow, tenant_id, make_cow, make_insemination
):
    cow = make_cow(last_calving=utc(2023, 1, 15))
    uow.seed(cow, make_insemination(cow, utc(2023, 6, 1), confirmed_pregnant=True))
    now = utc(2024, 3, 11)
    await record_calving.execute(
        uow,
        tenant_id,
        record_calving.RecordCalvingInput(cow_id=cow.id, calved_at=utc(2024, 3, 10)),
        override=True,
    )
    assert await _state(uow, tenant_id, cow, now) is ReproState.OPEN

    cleared = await clear_calving.execute(uow, tenant_id, cow.id, override=True)
    assert cleared.cow.last_calving is None
    assert await _state(uow, tenant_id, cow, now) is ReproState.PREGNANT

    restored = await restore_calving.execute(
        uow, tenant_id, cow.id, cleared.audit_id, override=True
    )
    assert restored.cow.last_calving == utc(2024, 3, 10)
    assert await _state(uow, tenant_id, cow, now) is ReproState.OPEN

    actions = [e.action for e in uow.audit_log.items]
    assert actions == [
        AuditAction.CALVING_SET.value,
        AuditAction.CALVING_CLEAR.value,
        AuditAction.CALVING_RESTORE.value,
    ]
    assert uow.audit_log.items[-1].payload["from_audit"] == str(cleared.audit_id)
    assert {e.actor for e in uow.audit_log.items} == {AuditActor.OVERRIDE.value}


@pytest.mark.asyncio
async def test_restoring_a_calving_set_puts_back_the_previous_date(
    uow, tenant_id, make_cow, make_insemination
):
    cow = make_cow(last_calving=utc(2023, 1, 15))
    uow.seed(cow, make_insemination(cow, utc(2023, 6, 1), confirmed_pregnant=True))
    mistaken = await record_calving.execute(
        uow,
        tenant_id,
        record_calving.RecordCalvingInput(cow_id=cow.id, calved_at=utc(2024, 3, 10)),
        override=True,
    )

    restored = await restore_calving.execute(
        uow, tenant_id, cow.id, mistaken.audit_id, override=True
    )

    assert restored.cow.last_calving == utc(2023, 1, 15)
    assert await _state(uow, tenant_id, cow, utc(2024, 3, 11)) is ReproState.PREGNANT


@pytest.mark.asyncio
async def test_calving_reversal_guards(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)

    with pytest.raises(OverrideRequired):
        await clear_calving.execute(uow, tenant_id, cow.id)
    with pytest.raises(ConflictError):
        await clear_calving.execute(uow, tenant_id, cow.id, override=True)
    with pytest.raises(OverrideRequired):
        await restore_calving.execute(uow, tenant_id, cow.id, uuid4())
    with pytest.raises(NotFound):
        await restore_calving.execute(uow, tenant_id, cow.id, uuid4(), override=True)

    attempt = await record_insemination.execute(
        uow, tenant_id, record_insemination.RecordInseminationInput(cow_id=cow.id)
    )
    (add_entry,) = uow.audit_log.items
    assert add_entry.insemination_id == attempt.id
    with pytest.raises(NotFound):
        await restore_calving.execute(uow, tenant_id, cow.id, add_entry.id, override=True)


@pytest.mark.asyncio
async def test_delete_latest_attempt_and_restore_it(
    uow, tenant_id, make_cow, make_insemination
):
    cow = make_cow()
    older = make_insemination(cow, utc(2024, 1, 1), failed=True)
    newer = make_insemination(cow, utc(2024, 2, 1), confirmed_pregnant=True, notes="Sexed")
    uow.seed(cow, older, newer)
    now = utc(2024, 3, 1)

    with pytest.raises(ConflictError) as exc_info:
        await delete_latest_insemination.execute(
            uow, tenant_id, cow.id, older.id, override=True
        )
    assert exc_info.value.details == {"latest_id": str(newer.id)}

    deleted = await delete_latest_insemination.execute(
        uow, tenant_id, cow.id, newer.id, override=True
    )
    assert deleted.deleted_id == newer.id
    assert list(uow.inseminations.items) == [older.id]
    assert await _state(uow, tenant_id, cow, now) is ReproState.OPEN
    (delete_entry,) = uow.audit_log.items
    assert delete_entry.action == AuditAction.INSEMINATION_DELETE.value
    assert delete_entry.payload["snapshot"]["service_date"] == utc(2024, 2, 1).isoformat()

    restored = await restore_insemination.execute(
        uow, tenant_id, cow.id, deleted.audit_id, override=True
    )
    assert restored.id != newer.id
    assert restored.service_date == utc(2024, 2, 1)
    assert restored.confirmed_pregnant is True
    assert restored.notes == "Sexed"
    assert await _state(uow, tenant_id, cow, now) is ReproState.PREGNANT
    assert uow.audit_log.items[-1].action == AuditAction.INSEMINATION_RESTORE.value
    assert uow.audit_log.items[-1].insemination_id == restored.id


@pytest.mark.asyncio
async def test_insemination_reversal_guards(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)

    with pytest.raises(OverrideRequired):
        await delete_latest_insemination.execute(uow, tenant_id, cow.id, uuid4())
    with pytest.raises(NotFound):
        await delete_latest_insemination.execute(uow, tenant_id, cow.id, uuid4(), override=True)
    with pytest.raises(OverrideRequired):
        await restore_insemination.execute(uow, tenant_id, cow.id, uuid4())
    with pytest.raises(NotFound):
        await restore_insemination.execute(uow, tenant_id, cow.id, uuid4(), override=True)

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from herdcycle.application.errors import NotFound, ValidationError
from herdcycle.application.use_cases.alerts import list_milestones
from herdcycle.application.use_cases.confirmations import (
    create_confirmation,
    list_confirmations,
    list_confirmations_in_range,
    undo_confirmation,
)
from herdcycle.domain.models.milestone import MilestoneType


def utc(year, month, day, hour=0, minute=0):
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def payload(entity_id, when, type="calving", entity_type="cow", **extra):
    return create_confirmation.CreateConfirmationInput(
        entity_type=entity_type, entity_id=entity_id, type=type, when=when, **extra
    )


@pytest.mark.asyncio
async def test_create_confirmation_always_inserts(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)

    first = await create_confirmation.execute(uow, tenant_id, payload(cow.id, utc(2024, 3, 5)))
    second = await create_confirmation.execute(
        uow, tenant_id, payload(cow.id, utc(2024, 3, 5), note="again")
    )

    assert first.id != second.id
    assert len(uow.confirmations.items) == 2
    assert second.note == "again"
    assert second.undone is False


@pytest.mark.asyncio
async def test_create_confirmation_validates_types(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)

    with pytest.raises(ValidationError):
        await create_confirmation.execute(
            uow, tenant_id, payload(cow.id, utc(2024, 3, 5), entity_type="goat")
        )
    with pytest.raises(ValidationError):
        await create_confirmation.execute(
            uow, tenant_id, payload(cow.id, utc(2024, 3, 5), type="shearing")
        )


@pytest.mark.asyncio
async def test_create_confirmation_for_missing_entity(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)

    with pytest.raises(NotFound):
        await create_confirmation.execute(
            uow, tenant_id, payload(cow.id, utc(2024, 3, 5), entity_type="calf")
        )


@pytest.mark.asyncio
async def test_naive_dates_are_stored_as_utc(uow, tenant_id, make_calf):
    calf = make_calf()
    uow.seed(calf)

    created = await create_confirmation.execute(
        uow,
        tenant_id,
        payload(calf.id, datetime(2024, 3, 1, 9), type="weaning", entity_type="calf"),
    )

    assert created.when == utc(2024, 3, 1, 9)


@pytest.mark.asyncio
async def test_undo_is_idempotent_and_keeps_the_row(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)
    created = await create_confirmation.execute(uow, tenant_id, payload(cow.id, utc(2024, 3, 5)))

    undone = await undo_confirmation.execute(uow, tenant_id, created.id)
    again = await undo_confirmation.execute(uow, tenant_id, created.id)

    assert undone.undone is True
    assert again.undone is True
    assert again.updated_at == undone.updated_at
    assert created.id in uow.confirmations.items

    with pytest.raises(NotFound):
        await undo_confirmation.execute(uow, tenant_id, uuid4())


@pytest.mark.asyncio
async def test_list_confirmations_includes_undone_newest_first(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)
    older = await create_confirmation.execute(uow, tenant_id, payload(cow.id, utc(2024, 3, 5)))
    older.created_at -= timedelta(hours=1)
    newer = await create_confirmation.execute(
        uow, tenant_id, payload(cow.id, utc(2024, 3, 9), type="dryOff")
    )
    await undo_confirmation.execute(uow, tenant_id, older.id)

    items = await list_confirmations.execute(uow, tenant_id, "cow", cow.id)

    assert [c.id for c in items] == [newer.id, older.id]

    with pytest.raises(ValidationError):
        await list_confirmations.execute(uow, tenant_id, "goat", cow.id)


@pytest.mark.asyncio
async def test_range_listing_resolves_names_and_skips_undone(
    uow, tenant_id, make_cow, make_bull, make_calf
):
    cow = make_cow(name=None, number="77")
    bull = make_bull()
    calf = make_calf(name="Luna")
    uow.seed(cow, bull, calf)
    in_range = [
        await create_confirmation.execute(uow, tenant_id, payload(cow.id, utc(2024, 3, 1))),
        await create_confirmation.execute(
            uow,
            tenant_id,
            payload(bull.id, utc(2024, 3, 2), type="insemination", entity_type="bull"),
        ),
        await create_confirmation.execute(
            uow,
            tenant_id,
            payload(calf.id, utc(2024, 3, 31, 23, 59), type="weaning", entity_type="calf"),
        ),
    ]
    undone = await create_confirmation.execute(uow, tenant_id, payload(cow.id, utc(2024, 3, 3)))
    await undo_confirmation.execute(uow, tenant_id, undone.id)
    await create_confirmation.execute(uow, tenant_id, payload(cow.id, utc(2024, 4, 1)))

    items = await list_confirmations_in_range.execute(
        uow, tenant_id, date(2024, 3, 1), date(2024, 3, 31)
    )

    assert [i.confirmation.id for i in items] == [c.id for c in in_range]
    assert [i.entity_name for i in items] == ["#77", "Thor", "Luna"]


@pytest.mark.asyncio
async def test_range_listing_for_deleted_entity_has_empty_name(uow, tenant_id, make_cow):
    cow = make_cow()
    uow.seed(cow)
    await create_confirmation.execute(uow, tenant_id, payload(cow.id, utc(2024, 3, 1)))
    del uow.cows.items[cow.id]

    (item,) = await list_confirmations_in_range.execute(
        uow, tenant_id, date(2024, 3, 1), date(2024, 3, 1)
    )

    assert item.entity_name == ""


@pytest.mark.asyncio
async def test_range_listing_rejects_inverted_range(uow, tenant_id):
    with pytest.raises(ValidationError):
        await list_confirmations_in_range.execute(
            uow, tenant_id, date(2024, 3, 2), date(2024, 3, 1)
        )


@pytest.mark.asyncio
async def test_confirmed_milestone_leaves_and_returns_after_undo(
    uow, tenant_id, make_cow, make_insemination
):
    cow = make_cow()
    attempt = make_insemination(cow, utc(2024, 1, 1, 15), confirmed_pregnant=True)
    uow.seed(cow, attempt)
    now = utc(2024, 2, 1)

    before = await list_milestones.execute(uow, tenant_id, now)
    assert MilestoneType.CALVING in {m.type for m in before}

    # Same day as the projected calving, different time of day
    created = await create_confirmation.execute(
        uow, tenant_id, payload(cow.id, utc(2024, 10, 10, 0, 10))
    )
    confirmed = await list_milestones.execute(uow, tenant_id, now)
    assert MilestoneType.CALVING not in {m.type for m in confirmed}
    assert len(confirmed) == len(before) - 1

    await undo_confirmation.execute(uow, tenant_id, created.id)
    after = await list_milestones.execute(uow, tenant_id, now)
    assert MilestoneType.CALVING in {m.type for m in after}

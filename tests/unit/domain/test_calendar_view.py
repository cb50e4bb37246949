from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from uuid import uuid4

from herdcycle.domain.models.milestone import EntityRef, EntityType, MilestoneEvent, MilestoneType
from herdcycle.domain.services.calendar_view import build_calendar_view


def utc(year, month, day, hour=0):
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def milestone(when, lead_days=7, name="Bella"):
    return MilestoneEvent(
        entity=EntityRef(type=EntityType.COW, id=uuid4(), name=name),
        type=MilestoneType.DRY_OFF,
        label="Dry-Off",
        when=when,
        alert_date=when - timedelta(days=lead_days),
    )


def test_week_starts_on_sunday_at_midday():
    view = build_calendar_view([], date(2024, 3, 6), today=date(2024, 3, 6))

    assert len(view.week) == 7
    assert view.week[0].date == datetime(2024, 3, 3, 12, 0)
    assert view.week[6].date == datetime(2024, 3, 9, 12, 0)
    assert [b.date for b in view.week_alerts] == [b.date for b in view.week]


def test_sunday_anchor_starts_its_own_week():
    view = build_calendar_view([], date(2024, 3, 3), today=date(2024, 3, 3))

    assert view.week[0].date == datetime(2024, 3, 3, 12, 0)


def test_due_and_alert_views_bucket_independently():
    event = milestone(utc(2024, 3, 5, 22), lead_days=7)

    view = build_calendar_view([event], date(2024, 3, 6), today=date(2024, 3, 1))

    assert view.week[2].items == [event]
    assert all(not bucket.items for bucket in view.week_alerts)
    assert view.month_due.days[4].items == [event]
    # Alert date falls on 27 February, outside the anchor month
    assert all(not day.items for day in view.month.days)


def test_month_has_one_bucket_per_day():
    february = build_calendar_view([], date(2024, 2, 10), today=date(2024, 2, 10))
    march = build_calendar_view([], date(2024, 3, 10), today=date(2024, 3, 10))

    assert (february.month.year, february.month.month) == (2024, 2)
    assert len(february.month.days) == 29
    assert len(march.month_due.days) == 31
    assert march.month.days[0].day == 1


def test_past_due_uses_real_today_not_anchor():
    overdue = milestone(utc(2024, 3, 8))
    upcoming = milestone(utc(2024, 3, 22))

    view = build_calendar_view(
        [upcoming, overdue], date(2030, 1, 1), today=date(2024, 3, 10)
    )

    assert view.past_due == [overdue]


def test_past_due_defaults_to_the_current_day():
    now = datetime.now(timezone.utc)
    overdue = milestone(now + timedelta(days=6))
    upcoming = milestone(now + timedelta(days=8))

    view = build_calendar_view([upcoming, overdue], date(2099, 1, 1))

    assert view.past_due == [overdue]


def test_past_due_is_sorted_and_capped():
    events = [milestone(utc(2024, 1, day)) for day in (20, 10, 15, 25, 12)]

    view = build_calendar_view(events, date(2024, 3, 1), today=date(2024, 3, 1), past_due_limit=3)

    assert [e.when.day for e in view.past_due] == [10, 12, 15]

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Iterable

from herdcycle.domain.models.milestone import MilestoneEvent
from herdcycle.utils.datetime_tz import (
    DateLike,
    local_midday,
    month_bounds,
    start_of_week,
    to_day,
    utcnow,
)

DEFAULT_PAST_DUE_LIMIT = 100


@dataclass(slots=True)
class DayBucket:
    date: datetime
    items: list[MilestoneEvent] = field(default_factory=list)


@dataclass(slots=True)
class MonthDay:
    day: int
    items: list[MilestoneEvent] = field(default_factory=list)


@dataclass(slots=True)
class MonthView:
    year: int
    month: int
    days: list[MonthDay]


@dataclass(slots=True)
class CalendarView:
    week: list[DayBucket]
    week_alerts: list[DayBucket]
    month: MonthView
    month_due: MonthView
    past_due: list[MilestoneEvent]


def _empty_month(first: date, last: date) -> MonthView:
    return MonthView(
        year=first.year,
        month=first.month,
        days=[MonthDay(day=i) for i in range(1, last.day + 1)],
    )


def build_calendar_view(
    events: Iterable[MilestoneEvent],
    anchor: DateLike,
    *,
    today: DateLike | None = None,
    past_due_limit: int = DEFAULT_PAST_DUE_LIMIT,
) -> CalendarView:
    """Bucket milestones into the week (Sunday start) and month containing `anchor`.

    `week`/`month_due` group by due date, `week_alerts`/`month` by alert date.
    `past_due` is always relative to the real current day, never to `anchor`.
    """
    anchor_day = to_day(anchor)
    week_start = start_of_week(anchor_day)
    first_of_month, last_of_month = month_bounds(anchor_day)

    week_days = [week_start + timedelta(days=i) for i in range(7)]
    week = [DayBucket(date=local_midday(d)) for d in week_days]
    week_alerts = [DayBucket(date=local_midday(d)) for d in week_days]
    month = _empty_month(first_of_month, last_of_month)
    month_due = _empty_month(first_of_month, last_of_month)

    events = list(events)
    for event in events:
        due_day = to_day(event.when)
        alert_day = to_day(event.alert_date)

        if first_of_month <= alert_day <= last_of_month:
            month.days[alert_day.day - 1].items.append(event)
        if first_of_month <= due_day <= last_of_month:
            month_due.days[due_day.day - 1].items.append(event)

        due_index = (due_day - week_start).days
        if 0 <= due_index < 7:
            week[due_index].items.append(event)
        alert_index = (alert_day - week_start).days
        if 0 <= alert_index < 7:
            week_alerts[alert_index].items.append(event)

    real_today = to_day(today) if today is not None else to_day(utcnow())
    past_due = sorted(
        (e for e in events if to_day(e.alert_date) < real_today),
        key=lambda e: to_day(e.alert_date),
    )[: max(past_due_limit, 0)]

    return CalendarView(
        week=week,
        week_alerts=week_alerts,
        month=month,
        month_due=month_due,
        past_due=past_due,
    )

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable

from herdcycle.domain.models.animal import Cow
from herdcycle.domain.models.insemination import Insemination
from herdcycle.domain.models.timing_config import TimingConfig
from herdcycle.domain.value_objects.repro_state import CycleOutcome, ReproState
from herdcycle.utils.datetime_tz import add_days, days_between, ensure_aware, to_day, utcnow

# The latest attempt's outcome always wins; a calving only ends a pregnancy.
_TRANSITIONS: dict[tuple[ReproState, CycleOutcome], ReproState] = {
    **{(state, CycleOutcome.INSEMINATED): ReproState.PENDING for state in ReproState},
    **{(state, CycleOutcome.CONFIRMED): ReproState.PREGNANT for state in ReproState},
    **{(state, CycleOutcome.FAILED): ReproState.OPEN for state in ReproState},
    (ReproState.OPEN, CycleOutcome.CALVED): ReproState.OPEN,
    (ReproState.PENDING, CycleOutcome.CALVED): ReproState.PENDING,
    (ReproState.PREGNANT, CycleOutcome.CALVED): ReproState.OPEN,
}


@dataclass(slots=True, frozen=True)
class ReproInfo:
    status: ReproState
    gestation_days: int
    latest: Insemination | None = None
    records_count: int = 0
    conception_date: datetime | None = None
    est_calving: datetime | None = None
    dry_off_date: datetime | None = None
    change_feed_date: datetime | None = None
    retry_window_end: datetime | None = None
    next_insemination_earliest: datetime | None = None
    can_add_insemination_now: bool = False
    can_retry_now: bool = False
    can_confirm_now: bool = False
    # Signed day counts: negative = in the past
    days_until_retry_window_end: int | None = None
    days_until_calving: int | None = None
    days_until_dry_off: int | None = None
    days_until_change_feed: int | None = None
    days_until_latest_insemination: int | None = None
    days_until_last_calving: int | None = None
    days_until_conception: int | None = None
    days_until_next_insemination_earliest: int | None = None


def classify(event: Insemination) -> CycleOutcome:
    if event.confirmed_pregnant:
        return CycleOutcome.CONFIRMED
    if event.failed:
        return CycleOutcome.FAILED
    return CycleOutcome.INSEMINATED


def step(state: ReproState, outcome: CycleOutcome) -> ReproState:
    return _TRANSITIONS[(state, outcome)]


def transition(
    state: ReproState,
    latest: Insemination | None,
    last_calving: datetime | None,
) -> ReproState:
    """Apply the latest attempt, then a calving recorded after its conception date.

    A calving on a later day than a confirmed conception means that pregnancy
    already completed, so the cycle reopens.
    """
    if latest is None:
        return ReproState.OPEN
    state = step(state, classify(latest))
    if last_calving is not None and to_day(last_calving) > to_day(latest.service_date):
        state = step(state, CycleOutcome.CALVED)
    return state


def _recency_key(event: Insemination) -> tuple[datetime, datetime]:
    return ensure_aware(event.service_date), ensure_aware(event.created_at)


def sort_latest_first(cow: Cow, events: Iterable[Insemination]) -> list[Insemination]:
    """Attempts belonging to `cow`, newest service date first (ties: newest record)."""
    own = [e for e in events if e.cow_id == cow.id]
    return sorted(own, key=_recency_key, reverse=True)


def compute_reproductive_state(
    cow: Cow,
    config: TimingConfig,
    events: Iterable[Insemination],
    now: datetime | None = None,
) -> ReproInfo:
    """Derive the cow's cycle state and projected milestone dates.

    Pure with respect to its inputs; `now` only feeds the "can ... now" flags
    and the signed day counters.
    """
    now = now or utcnow()
    today = to_day(now)
    records = sort_latest_first(cow, events)
    latest = records[0] if records else None
    last_calving = cow.last_calving

    status = transition(ReproState.OPEN, latest, last_calving)

    conception_date = None
    est_calving = None
    dry_off_date = None
    change_feed_date = None
    retry_window_end = None
    next_insemination_earliest = None

    if latest is not None:
        latest_date = latest.service_date
        if status is ReproState.PREGNANT:
            conception_date = latest_date
            est_calving = add_days(latest_date, config.gestation_days)
            dry_off_date = add_days(latest_date, config.dry_off_after_successful_insem_days)
            change_feed_date = add_days(latest_date, config.change_feed_after_successful_insem_days)
        elif status is ReproState.PENDING:
            retry_window_end = add_days(latest_date, config.insemination_interval_days)
        elif latest.failed:
            next_insemination_earliest = add_days(latest_date, config.insemination_interval_days)

    if status is ReproState.OPEN and last_calving is not None:
        postpartum_earliest = add_days(last_calving, config.postpartum_insemination_start_days)
        if next_insemination_earliest is None or to_day(postpartum_earliest) > to_day(
            next_insemination_earliest
        ):
            next_insemination_earliest = postpartum_earliest

    def until(value: datetime | None) -> int | None:
        return days_between(value, today) if value is not None else None

    retry_due = retry_window_end is not None and today >= to_day(retry_window_end)

    return ReproInfo(
        status=status,
        gestation_days=config.gestation_days,
        latest=latest,
        records_count=len(records),
        conception_date=conception_date,
        est_calving=est_calving,
        dry_off_date=dry_off_date,
        change_feed_date=change_feed_date,
        retry_window_end=retry_window_end,
        next_insemination_earliest=next_insemination_earliest,
        can_add_insemination_now=status is ReproState.OPEN
        and (next_insemination_earliest is None or today >= to_day(next_insemination_earliest)),
        can_retry_now=status is ReproState.PENDING and retry_due,
        can_confirm_now=status is ReproState.PENDING and retry_due,
        days_until_retry_window_end=until(retry_window_end),
        days_until_calving=until(est_calving),
        days_until_dry_off=until(dry_off_date),
        days_until_change_feed=until(change_feed_date),
        days_until_latest_insemination=until(latest.service_date if latest else None),
        days_until_last_calving=until(last_calving),
        days_until_conception=until(conception_date),
        days_until_next_insemination_earliest=until(next_insemination_earliest),
    )

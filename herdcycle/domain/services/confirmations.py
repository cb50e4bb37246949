from __future__ import annotations

from typing import Iterable

from herdcycle.domain.models.confirmation import Confirmation, ConfirmationKey
from herdcycle.domain.models.milestone import MilestoneEvent
from herdcycle.utils.datetime_tz import to_day


def milestone_key(event: MilestoneEvent) -> ConfirmationKey:
    # Whole-day precision tolerates time-of-day jitter between stored and recomputed dates
    return (event.entity.type.value, event.entity.id, event.type.value, to_day(event.when))


def active_keys(confirmations: Iterable[Confirmation]) -> set[ConfirmationKey]:
    return {c.day_key() for c in confirmations if not c.undone}


def filter_active(
    events: Iterable[MilestoneEvent], confirmations: Iterable[Confirmation]
) -> list[MilestoneEvent]:
    """Drop milestones already acknowledged by a non-undone confirmation."""
    confirmed = active_keys(confirmations)
    return [e for e in events if milestone_key(e) not in confirmed]

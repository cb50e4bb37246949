from __future__ import annotations

import logging
from collections import defaultdict
from datetime import datetime
from typing import Any, Iterable
from uuid import UUID

from herdcycle.domain.models.animal import Calf, Cow
from herdcycle.domain.models.insemination import Insemination
from herdcycle.domain.models.milestone import EntityRef, EntityType, MilestoneEvent, MilestoneType
from herdcycle.domain.models.timing_config import TimingConfig
from herdcycle.domain.services.maturity import graduation_target, weaning_target
from herdcycle.domain.services.reproduction import compute_reproductive_state
from herdcycle.utils.datetime_tz import add_days, utcnow

logger = logging.getLogger(__name__)

# Errors a malformed record can raise while its dates are projected
_RECORD_ERRORS = (ValueError, TypeError, OverflowError, AttributeError)


def _event(
    entity: EntityRef,
    type: MilestoneType,
    label: str,
    when: datetime,
    config: TimingConfig,
    meta: dict[str, Any] | None = None,
) -> MilestoneEvent:
    return MilestoneEvent(
        entity=entity,
        type=type,
        label=label,
        when=when,
        alert_date=add_days(when, -config.lead_time(type)),
        meta=meta or {},
    )


def cow_milestones(
    cow: Cow,
    config: TimingConfig,
    events: Iterable[Insemination],
    now: datetime | None = None,
) -> list[MilestoneEvent]:
    repro = compute_reproductive_state(cow, config, events, now)
    entity = EntityRef(type=EntityType.COW, id=cow.id, name=cow.display_name)
    out: list[MilestoneEvent] = []
    if repro.retry_window_end:
        out.append(
            _event(
                entity,
                MilestoneType.PREGNANCY_CHECK,
                "Pregnancy check",
                repro.retry_window_end,
                config,
                {"latest_id": str(repro.latest.id) if repro.latest else None},
            )
        )
    if repro.next_insemination_earliest:
        out.append(
            _event(
                entity,
                MilestoneType.INSEMINATION,
                "Earliest insemination",
                repro.next_insemination_earliest,
                config,
            )
        )
    if repro.dry_off_date:
        out.append(_event(entity, MilestoneType.DRY_OFF, "Dry-Off", repro.dry_off_date, config))
    if repro.change_feed_date:
        out.append(
            _event(entity, MilestoneType.CHANGE_FEED, "Change Feed", repro.change_feed_date, config)
        )
    if repro.est_calving:
        out.append(
            _event(entity, MilestoneType.CALVING, "Estimated Calving", repro.est_calving, config)
        )
    return out


def calf_milestones(calf: Calf, config: TimingConfig) -> list[MilestoneEvent]:
    if calf.graduated or not calf.is_alive:
        return []
    if calf.birth_date is None or calf.gender is None:
        return []
    entity = EntityRef(type=EntityType.CALF, id=calf.id, name=calf.display_name)
    gender = calf.gender.value
    out = [
        _event(
            entity,
            MilestoneType.WEANING,
            f"Weaning ({gender})",
            weaning_target(calf, config),
            config,
        ),
        _event(
            entity,
            MilestoneType.GRADUATION,
            f"Graduate ({gender})",
            graduation_target(calf, config),
            config,
        ),
    ]
    return out


def build_milestones(
    cows: Iterable[Cow],
    calves: Iterable[Calf],
    config: TimingConfig,
    events: Iterable[Insemination],
    now: datetime | None = None,
) -> list[MilestoneEvent]:
    """Project every animal's upcoming milestones into one unordered list.

    One malformed animal is skipped (and logged) instead of failing the batch.
    Attempts whose cow is not in `cows` are ignored.
    """
    now = now or utcnow()
    cows = list(cows)
    by_cow: dict[UUID, list[Insemination]] = defaultdict(list)
    for event in events:
        by_cow[event.cow_id].append(event)

    known = {cow.id for cow in cows}
    orphaned = sum(len(items) for cow_id, items in by_cow.items() if cow_id not in known)
    if orphaned:
        logger.debug("Ignoring %d inseminations referencing unknown cows", orphaned)

    milestones: list[MilestoneEvent] = []
    for cow in cows:
        try:
            milestones.extend(cow_milestones(cow, config, by_cow.get(cow.id, []), now))
        except _RECORD_ERRORS as exc:
            logger.warning("Skipping cow %s in milestone build: %s", cow.id, exc)

    for calf in calves:
        try:
            milestones.extend(calf_milestones(calf, config))
        except _RECORD_ERRORS as exc:
            logger.warning("Skipping calf %s in milestone build: %s", calf.id, exc)

    return milestones

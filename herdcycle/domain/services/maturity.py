from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from herdcycle.domain.models.animal import Calf
from herdcycle.domain.models.timing_config import TimingConfig
from herdcycle.utils.datetime_tz import add_days, add_months, days_between, utcnow


@dataclass(slots=True, frozen=True)
class MaturityInfo:
    target_date: datetime
    days_left: int
    ready: bool


def _info(target: datetime, now: datetime) -> MaturityInfo:
    days_left = days_between(target, now)
    return MaturityInfo(target_date=target, days_left=days_left, ready=days_left <= 0)


def graduation_target(calf: Calf, config: TimingConfig) -> datetime | None:
    if calf.birth_date is None or calf.gender is None:
        return None
    return add_months(calf.birth_date, config.maturity_months_for(calf.gender.value))


def weaning_target(calf: Calf, config: TimingConfig) -> datetime | None:
    if calf.birth_date is None or calf.gender is None:
        return None
    return add_days(calf.birth_date, config.weaning_days_for(calf.gender.value))


def compute_maturity(
    calf: Calf, config: TimingConfig, now: datetime | None = None
) -> MaturityInfo | None:
    """Graduation readiness: birth date plus the sex-specific maturity in calendar months."""
    target = graduation_target(calf, config)
    if target is None:
        return None
    return _info(target, now or utcnow())


def compute_weaning(
    calf: Calf, config: TimingConfig, now: datetime | None = None
) -> MaturityInfo | None:
    target = weaning_target(calf, config)
    if target is None:
        return None
    return _info(target, now or utcnow())


def is_ready_to_graduate(calf: Calf, config: TimingConfig, now: datetime | None = None) -> bool:
    if calf.graduated or not calf.is_alive:
        return False
    info = compute_maturity(calf, config, now)
    return bool(info and info.ready)

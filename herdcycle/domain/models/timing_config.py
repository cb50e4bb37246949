from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Mapping
from uuid import UUID

from herdcycle.domain.models.milestone import MilestoneType

logger = logging.getLogger(__name__)

# Central default table; every consumer resolves values through TimingConfig.
TIMING_DEFAULTS: dict[str, int] = {
    # Core cow timing
    "gestation_days": 283,
    "dry_off_after_successful_insem_days": 220,
    "change_feed_after_successful_insem_days": 210,
    "postpartum_insemination_start_days": 45,
    "insemination_interval_days": 21,
    # Alert lead times
    "calving_alert_before_days": 7,
    "dry_off_alert_before_days": 7,
    "change_feed_alert_before_days": 7,
    "pregnancy_check_alert_before_days": 7,
    "insemination_alert_before_days": 7,
    "graduation_alert_before_days": 30,
    "weaning_alert_before_days": 7,
    # Calf management
    "female_weaning_days": 60,
    "male_weaning_days": 60,
    "female_maturity_months": 24,
    "male_maturity_months": 24,
}

# Legacy month-based interval conversion factor
DAYS_PER_LEGACY_MONTH = 30

# Upper bounds keep every projected date within the datetime range
MAX_TIMING_DAYS = 3650
MAX_TIMING_MONTHS = 240

_LEAD_TIME_FIELDS: dict[MilestoneType, str] = {
    MilestoneType.CALVING: "calving_alert_before_days",
    MilestoneType.DRY_OFF: "dry_off_alert_before_days",
    MilestoneType.CHANGE_FEED: "change_feed_alert_before_days",
    MilestoneType.PREGNANCY_CHECK: "pregnancy_check_alert_before_days",
    MilestoneType.INSEMINATION: "insemination_alert_before_days",
    MilestoneType.GRADUATION: "graduation_alert_before_days",
    MilestoneType.WEANING: "weaning_alert_before_days",
}


def _camel_to_snake(name: str) -> str:
    out = []
    for ch in name:
        if ch.isupper():
            out.append("_")
            out.append(ch.lower())
        else:
            out.append(ch)
    return "".join(out).lstrip("_")


def max_timing_value(name: str) -> int:
    return MAX_TIMING_MONTHS if name.endswith("_months") else MAX_TIMING_DAYS


def _coerce(value: Any, upper: int) -> int | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        number = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return None
    return number if 0 <= number <= upper else None


def migrate_legacy_settings(raw: Mapping[str, Any]) -> dict[str, int | None]:
    """Map any stored/imported settings shape onto the canonical field names.

    - camelCase keys are accepted (exports from older clients)
    - `insemination_interval_months` converts to days when the day value is absent
    - shared `weaning_days` fills the per-sex weaning fields when absent
    Legacy-only keys are dropped. Missing, malformed and out-of-range values
    are returned as None.
    """
    normalized = {_camel_to_snake(k): v for k, v in raw.items()}
    canonical: dict[str, int | None] = {
        name: _coerce(normalized.get(name), max_timing_value(name)) for name in TIMING_DEFAULTS
    }
    if canonical["insemination_interval_days"] is None:
        months = _coerce(
            normalized.get("insemination_interval_months"),
            MAX_TIMING_DAYS // DAYS_PER_LEGACY_MONTH,
        )
        if months is not None:
            canonical["insemination_interval_days"] = months * DAYS_PER_LEGACY_MONTH
            logger.info("Migrated insemination_interval_months -> insemination_interval_days")
    shared_weaning = _coerce(normalized.get("weaning_days"), MAX_TIMING_DAYS)
    if shared_weaning is not None:
        for name in ("female_weaning_days", "male_weaning_days"):
            if canonical[name] is None:
                canonical[name] = shared_weaning
    return canonical


@dataclass(slots=True)
class TimingConfig:
    tenant_id: UUID | None = None
    gestation_days: int = TIMING_DEFAULTS["gestation_days"]
    dry_off_after_successful_insem_days: int = TIMING_DEFAULTS[
        "dry_off_after_successful_insem_days"
    ]
    change_feed_after_successful_insem_days: int = TIMING_DEFAULTS[
        "change_feed_after_successful_insem_days"
    ]
    postpartum_insemination_start_days: int = TIMING_DEFAULTS[
        "postpartum_insemination_start_days"
    ]
    insemination_interval_days: int = TIMING_DEFAULTS["insemination_interval_days"]
    calving_alert_before_days: int = TIMING_DEFAULTS["calving_alert_before_days"]
    dry_off_alert_before_days: int = TIMING_DEFAULTS["dry_off_alert_before_days"]
    change_feed_alert_before_days: int = TIMING_DEFAULTS["change_feed_alert_before_days"]
    pregnancy_check_alert_before_days: int = TIMING_DEFAULTS[
        "pregnancy_check_alert_before_days"
    ]
    insemination_alert_before_days: int = TIMING_DEFAULTS["insemination_alert_before_days"]
    graduation_alert_before_days: int = TIMING_DEFAULTS["graduation_alert_before_days"]
    weaning_alert_before_days: int = TIMING_DEFAULTS["weaning_alert_before_days"]
    female_weaning_days: int = TIMING_DEFAULTS["female_weaning_days"]
    male_weaning_days: int = TIMING_DEFAULTS["male_weaning_days"]
    female_maturity_months: int = TIMING_DEFAULTS["female_maturity_months"]
    male_maturity_months: int = TIMING_DEFAULTS["male_maturity_months"]
    updated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def from_mapping(
        cls,
        raw: Mapping[str, Any] | None,
        *,
        tenant_id: UUID | None = None,
        updated_at: datetime | None = None,
    ) -> TimingConfig:
        """Build the canonical config from any stored shape, filling defaults."""
        canonical = migrate_legacy_settings(raw or {})
        values: dict[str, int] = {}
        for name, default in TIMING_DEFAULTS.items():
            value = canonical[name]
            if value is None:
                logger.debug("Timing value %s missing or invalid; using default %d", name, default)
                value = default
            values[name] = value
        config = cls(tenant_id=tenant_id, **values)
        if updated_at is not None:
            config.updated_at = updated_at
        return config

    @classmethod
    def defaults(cls, tenant_id: UUID | None = None) -> TimingConfig:
        return cls(tenant_id=tenant_id)

    def as_dict(self) -> dict[str, int]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in TIMING_DEFAULTS}

    def lead_time(self, milestone_type: MilestoneType) -> int:
        return getattr(self, _LEAD_TIME_FIELDS[milestone_type])

    def weaning_days_for(self, gender: str) -> int:
        return self.female_weaning_days if gender == "female" else self.male_weaning_days

    def maturity_months_for(self, gender: str) -> int:
        return self.female_maturity_months if gender == "female" else self.male_maturity_months

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from herdcycle.domain.models.timing_config import MAX_TIMING_DAYS, MAX_TIMING_MONTHS


class TimingConfigResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    gestation_days: int
    dry_off_after_successful_insem_days: int
    change_feed_after_successful_insem_days: int
    postpartum_insemination_start_days: int
    insemination_interval_days: int
    calving_alert_before_days: int
    dry_off_alert_before_days: int
    change_feed_alert_before_days: int
    pregnancy_check_alert_before_days: int
    insemination_alert_before_days: int
    graduation_alert_before_days: int
    weaning_alert_before_days: int
    female_weaning_days: int
    male_weaning_days: int
    female_maturity_months: int
    male_maturity_months: int
    updated_at: datetime


class TimingConfigUpdate(BaseModel):
    """Partial update; omitted fields keep their stored value."""

    model_config = ConfigDict(extra="forbid")

    gestation_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    dry_off_after_successful_insem_days: int | None = Field(
        default=None, ge=0, le=MAX_TIMING_DAYS
    )
    change_feed_after_successful_insem_days: int | None = Field(
        default=None, ge=0, le=MAX_TIMING_DAYS
    )
    postpartum_insemination_start_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    insemination_interval_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    calving_alert_before_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    dry_off_alert_before_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    change_feed_alert_before_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    pregnancy_check_alert_before_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    insemination_alert_before_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    graduation_alert_before_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    weaning_alert_before_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    female_weaning_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    male_weaning_days: int | None = Field(default=None, ge=0, le=MAX_TIMING_DAYS)
    female_maturity_months: int | None = Field(default=None, ge=0, le=MAX_TIMING_MONTHS)
    male_maturity_months: int | None = Field(default=None, ge=0, le=MAX_TIMING_MONTHS)

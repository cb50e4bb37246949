from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, Integer, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from herdcycle.infrastructure.db.base import Base


class TimingConfigORM(Base):
    """Per-tenant timing settings.

    Every value column is nullable: rows written by older releases may lack
    newer fields, and the repository fills the gaps with defaults on read.
    """

    __tablename__ = "timing_configs"

    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    gestation_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    dry_off_after_successful_insem_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    change_feed_after_successful_insem_days: Mapped[int | None] = mapped_column(
        Integer, nullable=True
    )
    postpartum_insemination_start_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    insemination_interval_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    calving_alert_before_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    dry_off_alert_before_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    change_feed_alert_before_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    pregnancy_check_alert_before_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    insemination_alert_before_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    graduation_alert_before_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weaning_alert_before_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    female_weaning_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    male_weaning_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    female_maturity_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    male_maturity_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    # Legacy shapes, read once and cleared on the next write
    insemination_interval_months: Mapped[int | None] = mapped_column(Integer, nullable=True)
    weaning_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )

from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, ForeignKey, Index, Integer, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from herdcycle.infrastructure.db.base import Base


class InseminationORM(Base):
    __tablename__ = "inseminations"
    __table_args__ = (
        Index(
            "ix_inseminations_tenant_cow_date",
            "tenant_id",
            "cow_id",
            "service_date",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False)
    cow_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("cows.id"),
        nullable=False,
    )
    service_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    confirmed_pregnant: Mapped[bool] = mapped_column(
        Boolean, server_default="false", nullable=False
    )
    failed: Mapped[bool] = mapped_column(Boolean, server_default="false", nullable=False)
    forced: Mapped[bool] = mapped_column(Boolean, server_default="false", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

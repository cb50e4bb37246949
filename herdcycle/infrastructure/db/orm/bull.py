from __future__ import annotations

from datetime import date, datetime
from uuid import UUID

from sqlalchemy import Boolean, Date, DateTime, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from herdcycle.infrastructure.db.base import Base


class BullORM(Base):
    __tablename__ = "bulls"
    __table_args__ = (Index("ix_bulls_tenant_number", "tenant_id", "number"),)

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    birth_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    is_insemination: Mapped[bool] = mapped_column(Boolean, server_default="false", nullable=False)
    mother_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    mother_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mother_breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    sire_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sire_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sire_breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

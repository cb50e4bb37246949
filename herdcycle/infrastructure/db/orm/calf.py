from __future__ import annotations

from datetime import datetime
from uuid import UUID

from sqlalchemy import Boolean, DateTime, Index, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from herdcycle.infrastructure.db.base import Base


class CalfORM(Base):
    __tablename__ = "calves"
    __table_args__ = (
        Index(
            "ix_calves_pending_graduation",
            "tenant_id",
            "birth_date",
            postgresql_where="graduated = false AND status = 'alive'",
        ),
    )

    id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True)
    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    birth_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(8), nullable=True)
    status: Mapped[str] = mapped_column(String(16), server_default="alive", nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    mother_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    mother_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    mother_breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    sire_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    sire_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    sire_breed: Mapped[str | None] = mapped_column(String(128), nullable=True)
    graduated: Mapped[bool] = mapped_column(Boolean, server_default="false", nullable=False)
    graduated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    adult_type: Mapped[str | None] = mapped_column(String(8), nullable=True)
    adult_id: Mapped[UUID | None] = mapped_column(Uuid(as_uuid=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

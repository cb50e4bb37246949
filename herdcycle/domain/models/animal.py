from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from uuid import UUID, uuid4


class CalfGender(str, Enum):
    MALE = "male"
    FEMALE = "female"


class CalfStatus(str, Enum):
    ALIVE = "alive"
    MISCARRIAGE = "miscarriage"
    DIED = "died"


class AdultType(str, Enum):
    COW = "cow"
    BULL = "bull"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, kw_only=True)
class Lineage:
    """Parent references resolved by natural key (registration number)."""

    mother_number: str | None = None
    mother_name: str | None = None
    mother_breed: str | None = None
    sire_number: str | None = None
    sire_name: str | None = None
    sire_breed: str | None = None

    def lineage_fields(self) -> dict[str, str | None]:
        return {
            "mother_number": self.mother_number,
            "mother_name": self.mother_name,
            "mother_breed": self.mother_breed,
            "sire_number": self.sire_number,
            "sire_name": self.sire_name,
            "sire_breed": self.sire_breed,
        }


@dataclass(slots=True, kw_only=True)
class Cow(Lineage):
    id: UUID
    tenant_id: UUID
    number: str | None = None
    name: str | None = None
    breed: str | None = None
    birth_date: date | None = None
    last_calving: datetime | None = None
    notes: str | None = None
    photo_url: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    version: int = 1

    @property
    def display_name(self) -> str:
        return self.name or self.number or "Cow"

    def record_calving(self, calved_at: datetime) -> None:
        self.last_calving = calved_at
        self.bump_version()

    def clear_calving(self) -> None:
        self.last_calving = None
        self.bump_version()

    def bump_version(self) -> None:
        self.version += 1
        self.updated_at = _utcnow()


@dataclass(slots=True, kw_only=True)
class Bull(Lineage):
    id: UUID
    tenant_id: UUID
    number: str | None = None
    name: str | None = None
    breed: str | None = None
    birth_date: date | None = None
    notes: str | None = None
    photo_url: str | None = None
    # AI/semen catalog bulls have no parents and are only used for insemination
    is_insemination: bool = False
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    version: int = 1

    @property
    def display_name(self) -> str:
        return self.name or self.number or "Bull"


@dataclass(slots=True, kw_only=True)
class Calf(Lineage):
    id: UUID
    tenant_id: UUID
    name: str
    breed: str | None = None
    birth_date: datetime | None = None
    gender: CalfGender | None = None
    status: CalfStatus = CalfStatus.ALIVE
    notes: str | None = None
    photo_url: str | None = None
    graduated: bool = False
    graduated_at: datetime | None = None
    adult_type: AdultType | None = None
    adult_id: UUID | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    version: int = 1

    @classmethod
    def create(
        cls,
        tenant_id: UUID,
        name: str,
        birth_date: datetime,
        gender: CalfGender,
        breed: str | None = None,
        status: CalfStatus = CalfStatus.ALIVE,
        notes: str | None = None,
        **lineage: str | None,
    ) -> Calf:
        now = _utcnow()
        return cls(
            id=uuid4(),
            tenant_id=tenant_id,
            name=name,
            breed=breed,
            birth_date=birth_date,
            gender=gender,
            status=status,
            notes=notes,
            created_at=now,
            updated_at=now,
            **lineage,
        )

    @property
    def display_name(self) -> str:
        return self.name or "Calf"

    @property
    def is_alive(self) -> bool:
        return self.status == CalfStatus.ALIVE

    def graduate(self, adult_type: AdultType, adult_id: UUID, at: datetime) -> None:
        if self.graduated:
            raise ValueError("Calf already graduated")
        self.graduated = True
        self.graduated_at = at
        self.adult_type = adult_type
        self.adult_id = adult_id
        self.version += 1
        self.updated_at = _utcnow()


def adult_from_calf(calf: Calf, *, at: datetime) -> Cow | Bull:
    """Build the independent adult record a calf graduates into."""
    notes = (calf.notes or "") + f"\nGraduated from calf on {at.date().isoformat()}"
    common = dict(
        id=uuid4(),
        tenant_id=calf.tenant_id,
        number=None,
        name=calf.name,
        breed=calf.breed,
        birth_date=calf.birth_date.date() if calf.birth_date else None,
        notes=notes,
        photo_url=calf.photo_url,
        created_at=at,
        updated_at=at,
        **calf.lineage_fields(),
    )
    if calf.gender == CalfGender.FEMALE:
        return Cow(**common)
    return Bull(**common)

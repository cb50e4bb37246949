from __future__ import annotations

from enum import Enum


class ReproState(str, Enum):
    OPEN = "Open"
    PENDING = "Pending"
    PREGNANT = "Pregnant"


class CycleOutcome(str, Enum):
    INSEMINATED = "inseminated"
    CONFIRMED = "confirmed"
    FAILED = "failed"
    CALVED = "calved"

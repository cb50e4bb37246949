from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    MEMBER = "MEMBER"

    def can_override(self) -> bool:
        return self in {Role.SUPER_ADMIN, Role.ADMIN}

    def can_manage_settings(self) -> bool:
        return self in {Role.SUPER_ADMIN, Role.ADMIN}

from __future__ import annotations

import enum


class UserRole(str, enum.Enum):
    """Platform-wide role; the only input to authorization decisions."""
    admin = "admin"
    user = "user"
    store_owner = "store_owner"

    @classmethod
    def values(cls) -> list[str]:
        return [e.value for e in cls]

    @classmethod
    def parse(cls, raw: str | None) -> "UserRole | None":
        try:
            return cls(raw)
        except ValueError:
            return None

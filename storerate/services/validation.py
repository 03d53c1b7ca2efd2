from __future__ import annotations

import re

from storerate.core.errors import ValidationError
from storerate.models.enums import UserRole

NAME_MIN_LEN = 20
NAME_MAX_LEN = 60
ADDRESS_MAX_LEN = 400
RATING_MIN = 1
RATING_MAX = 5

PASSWORD_SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

_EMAIL_RE = re.compile(r"[^\s@]+@[^\s@]+\.[^\s@]+")
_PASSWORD_RE = re.compile(r"(?=.*[A-Z])(?=.*[" + re.escape(PASSWORD_SYMBOLS) + r"]).{8,16}")

NAME_MESSAGE = f"Name must be between {NAME_MIN_LEN} and {NAME_MAX_LEN} characters"
EMAIL_MESSAGE = "Invalid email format"
ADDRESS_MESSAGE = f"Address must not exceed {ADDRESS_MAX_LEN} characters"
PASSWORD_MESSAGE = "Password must be 8-16 characters with at least one uppercase letter and one special character"
ROLE_MESSAGE = "Invalid role"
RATING_MESSAGE = f"Rating must be between {RATING_MIN} and {RATING_MAX}"


def is_valid_name(name: str | None) -> bool:
    return bool(name) and NAME_MIN_LEN <= len(name) <= NAME_MAX_LEN


def is_valid_email(email: str | None) -> bool:
    return bool(email) and _EMAIL_RE.fullmatch(email) is not None


def is_valid_address(address: str | None) -> bool:
    return bool(address) and len(address) <= ADDRESS_MAX_LEN


def is_valid_password(password: str | None) -> bool:
    return bool(password) and _PASSWORD_RE.fullmatch(password) is not None


def check_password(password: str | None) -> str:
    if not is_valid_password(password):
        raise ValidationError(PASSWORD_MESSAGE)
    return password


def check_user_fields(*, name: str | None, email: str | None, address: str | None, password: str | None) -> None:
    """Raise ValidationError for the first bad field (name, email, address, password)."""
    if not is_valid_name(name):
        raise ValidationError(NAME_MESSAGE)
    if not is_valid_email(email):
        raise ValidationError(EMAIL_MESSAGE)
    if not is_valid_address(address):
        raise ValidationError(ADDRESS_MESSAGE)
    check_password(password)


def check_role(raw: str | UserRole | None) -> UserRole:
    role = raw if isinstance(raw, UserRole) else UserRole.parse(raw)
    if role is None:
        raise ValidationError(ROLE_MESSAGE)
    return role


def check_rating(value) -> int:
    # bool is an int subclass; True must not count as a 1-star rating.
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(RATING_MESSAGE)
    if not RATING_MIN <= value <= RATING_MAX:
        raise ValidationError(RATING_MESSAGE)
    return value

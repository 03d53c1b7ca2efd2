from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from fastapi.concurrency import run_in_threadpool
from jose import JWTError, jwt
from passlib.context import CryptContext
from pydantic import SecretStr

from storerate.core.errors import TokenInvalidError, TokenMissingError
from storerate.models.enums import UserRole


class PasswordHasher:
    """bcrypt hashing; the slow parts run in the threadpool so the event loop stays free."""

    def __init__(self, rounds: int = 10):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    async def hash_password(self, password: str) -> str:
        return await run_in_threadpool(self._context.hash, password)

    async def verify_password(self, password: str, password_hash: str) -> bool:
        return await run_in_threadpool(self._context.verify, password, password_hash)


@dataclass(frozen=True)
class TokenIdentity:
    id: int
    email: str
    role: UserRole


class TokenService:
    def __init__(self, secret: SecretStr, *, algorithm: str = "HS256", ttl_minutes: int = 60 * 24):
        self._secret = secret
        self.algorithm = algorithm
        self.ttl_minutes = ttl_minutes

    def issue(self, *, user_id: int, email: str, role: UserRole | str, ttl_minutes: int | None = None) -> str:
        ttl = self.ttl_minutes if ttl_minutes is None else ttl_minutes
        now = datetime.now(timezone.utc)
        payload: dict[str, Any] = {
            "sub": str(user_id),
            "id": int(user_id),
            "email": email,
            "role": UserRole(role).value,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=ttl)).timestamp()),
        }
        return jwt.encode(payload, self._secret.get_secret_value(), algorithm=self.algorithm)

    def verify(self, token: str | None) -> TokenIdentity:
        if not token:
            raise TokenMissingError()
        try:
            payload = jwt.decode(token, self._secret.get_secret_value(), algorithms=[self.algorithm])
        except JWTError:
            raise TokenInvalidError()

        user_id = payload.get("id")
        email = payload.get("email")
        try:
            role = UserRole(payload.get("role"))
        except ValueError:
            raise TokenInvalidError()
        if not isinstance(user_id, int) or isinstance(user_id, bool) or not isinstance(email, str):
            raise TokenInvalidError()
        return TokenIdentity(id=user_id, email=email, role=role)

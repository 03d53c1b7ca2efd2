from __future__ import annotations

from typing import AsyncIterator

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.core.errors import TokenMissingError
from storerate.core.security import PasswordHasher, TokenIdentity, TokenService

bearer = HTTPBearer(auto_error=False)


def get_token_service(request: Request) -> TokenService:
    return request.app.state.tokens


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.hasher


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    async for s in request.app.state.db.session():
        yield s


async def get_identity(
    creds: HTTPAuthorizationCredentials | None = Depends(bearer),
    tokens: TokenService = Depends(get_token_service),
) -> TokenIdentity:
    """Decode the bearer token. Stateless: the token alone is trusted until it expires."""
    if creds is None or not creds.credentials:
        raise TokenMissingError()
    return tokens.verify(creds.credentials)

from __future__ import annotations

from typing import Awaitable, Callable

from fastapi import Depends

from storerate.api.deps import get_identity
from storerate.core.errors import ForbiddenRoleError
from storerate.core.security import TokenIdentity
from storerate.models.enums import UserRole


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[TokenIdentity]]:
    """Dependency factory: authenticated identity whose role is in ``roles``.

    No token -> 401 token_missing, bad token -> 403 token_invalid,
    wrong role -> 403 forbidden_role.
    """
    allowed = frozenset(UserRole(r) for r in roles)
    if not allowed:
        raise ValueError("require_roles needs at least one role")

    async def _check(identity: TokenIdentity = Depends(get_identity)) -> TokenIdentity:
        if identity.role not in allowed:
            raise ForbiddenRoleError()
        return identity

    return _check


require_admin = require_roles(UserRole.admin)
require_user = require_roles(UserRole.user)
require_store_owner = require_roles(UserRole.store_owner)
require_authenticated = require_roles(*UserRole)

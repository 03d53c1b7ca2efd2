from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.core.errors import DuplicateEmailError, InvalidCredentialsError, NotFoundError
from storerate.core.security import PasswordHasher
from storerate.models.enums import UserRole
from storerate.models.user import User
from storerate.repos.store_repo import StoreRepo
from storerate.repos.user_repo import UserRepo
from storerate.services.validation import check_password, check_role, check_user_fields

log = logging.getLogger(__name__)


def public_user(user: User) -> dict:
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "address": user.address,
        "role": user.role,
    }


async def _insert_account(
    db: AsyncSession,
    *,
    name: str,
    email: str,
    address: str,
    password_hash: str,
    role: UserRole,
) -> User:
    """Insert the user, plus its store for store owners, as a single transaction.

    Any failure rolls back both rows before the error propagates.
    """
    try:
        try:
            user = await UserRepo(db).create(
                name=name, email=email, password_hash=password_hash, address=address, role=role.value
            )
        except IntegrityError as e:
            # lost a race against a concurrent signup with the same email
            raise DuplicateEmailError() from e
        if role is UserRole.store_owner:
            await StoreRepo(db).create(user_id=user.id)
        await db.commit()
    except Exception:
        await db.rollback()
        log.warning("account insert rolled back (email=%s role=%s)", email, role.value)
        raise
    return user


async def _register(
    db: AsyncSession,
    hasher: PasswordHasher,
    *,
    name: str,
    email: str,
    address: str,
    password: str,
    role: UserRole,
) -> dict:
    if await UserRepo(db).get_by_email(email):
        raise DuplicateEmailError()
    password_hash = await hasher.hash_password(password)
    user = await _insert_account(db, name=name, email=email, address=address, password_hash=password_hash, role=role)
    log.info("user created id=%s role=%s", user.id, role.value)
    return public_user(user)


async def create_user(
    db: AsyncSession,
    hasher: PasswordHasher,
    *,
    name: str | None,
    email: str | None,
    address: str | None,
    password: str | None,
    role: UserRole = UserRole.user,
) -> dict:
    """Self-service signup. Returns the public fields of the new user."""
    check_user_fields(name=name, email=email, address=address, password=password)
    return await _register(db, hasher, name=name, email=email, address=address, password=password, role=role)


async def create_admin_managed_user(
    db: AsyncSession,
    hasher: PasswordHasher,
    *,
    name: str | None,
    email: str | None,
    address: str | None,
    password: str | None,
    role: str | UserRole | None,
) -> dict:
    """Admin-created account of any role. Store owners get their store in the same transaction."""
    check_user_fields(name=name, email=email, address=address, password=password)
    user_role = check_role(role)
    return await _register(db, hasher, name=name, email=email, address=address, password=password, role=user_role)


async def verify_credentials(db: AsyncSession, hasher: PasswordHasher, email: str, password: str) -> User:
    user = await UserRepo(db).get_by_email(email)
    if not user or not await hasher.verify_password(password, user.password_hash):
        log.info("failed login for email=%s", email)
        raise InvalidCredentialsError()
    return user


async def change_password(
    db: AsyncSession,
    hasher: PasswordHasher,
    user_id: int,
    current_password: str | None,
    new_password: str | None,
) -> None:
    check_password(new_password)
    repo = UserRepo(db)
    user = await repo.get(user_id)
    if not user:
        raise NotFoundError("User not found")
    if not current_password or not await hasher.verify_password(current_password, user.password_hash):
        raise InvalidCredentialsError("Current password is incorrect")
    await repo.set_password_hash(user, await hasher.hash_password(new_password))
    await db.commit()
    log.info("password changed for user id=%s", user_id)

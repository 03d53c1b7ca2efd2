from __future__ import annotations

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from storerate.api.access import require_authenticated
from storerate.api.deps import get_db, get_hasher, get_token_service
from storerate.core.errors import ValidationError
from storerate.core.security import PasswordHasher, TokenIdentity, TokenService
from storerate.schemas.auth import (
    LoginRequest,
    LoginResponse,
    MeOut,
    MessageResponse,
    PasswordChangeRequest,
    SignupRequest,
    SignupResponse,
)
from storerate.services import accounts

router = APIRouter()


@router.post("/signup", response_model=SignupResponse, status_code=status.HTTP_201_CREATED)
async def signup(
    payload: SignupRequest,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    user = await accounts.create_user(
        db,
        hasher,
        name=payload.name,
        email=payload.email,
        address=payload.address,
        password=payload.password,
    )
    return {"message": "User registered successfully", "user": user}


@router.post("/login", response_model=LoginResponse)
async def login(
    payload: LoginRequest,
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    tokens: TokenService = Depends(get_token_service),
):
    if not payload.email or not payload.password:
        raise ValidationError("Email and password are required")
    user = await accounts.verify_credentials(db, hasher, payload.email, payload.password)
    token = tokens.issue(user_id=user.id, email=user.email, role=user.role)
    return {"token": token, "user": accounts.public_user(user)}


@router.get("/me", response_model=MeOut)
async def me(identity: TokenIdentity = Depends(require_authenticated)):
    return {"id": identity.id, "email": identity.email, "role": identity.role.value}


@router.put("/password", response_model=MessageResponse)
async def update_password(
    payload: PasswordChangeRequest,
    identity: TokenIdentity = Depends(require_authenticated),
    db: AsyncSession = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
):
    await accounts.change_password(db, hasher, identity.id, payload.current_password, payload.new_password)
    return {"message": "Password updated successfully"}

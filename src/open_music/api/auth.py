"""Authentication API endpoints."""

import logging
from datetime import UTC, datetime

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from open_music.database import get_db
from open_music.models.user import User
from open_music.schemas.user import Token, UserCreate, UserLogin, UserResponse
from open_music.utils.identifiers import new_user_id
from open_music.utils.security import (
    CurrentUser,
    create_access_token,
    hash_password,
    verify_password,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    user_data: UserCreate,
    db: AsyncSession = Depends(get_db),
) -> UserResponse:
    """Register a new user.

    The password is hashed with bcrypt before storage.

    Raises:
        HTTPException 409: If username or email already exists
    """
    username_result = await db.execute(select(User).where(User.username == user_data.username))
    if username_result.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Username already registered")

    email_result = await db.execute(select(User).where(User.email == user_data.email))
    if email_result.scalar_one_or_none():
        raise HTTPException(status_code=409, detail="Email already registered")

    new_user = User(
        id=new_user_id(),
        username=user_data.username,
        email=user_data.email,
        fullname=user_data.fullname,
        hashed_password=hash_password(user_data.password),
        created_at=datetime.now(UTC),
        is_active=True,
    )
    db.add(new_user)
    await db.flush()
    await db.refresh(new_user)
    logger.info("Registered user %s", new_user.id)

    return UserResponse.model_validate(new_user)


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    db: AsyncSession = Depends(get_db),
) -> Token:
    """Authenticate a user and return a JWT bearer token.

    Accepts either username or email in the username field.

    Raises:
        HTTPException 401: If credentials are invalid
        HTTPException 403: If user account is inactive
    """
    login_name = credentials.username.lower()
    result = await db.execute(
        select(User).where(or_(User.username == login_name, User.email == login_name))
    )
    user = result.scalar_one_or_none()

    if not user or not verify_password(credentials.password, user.hashed_password):
        raise HTTPException(status_code=401, detail="Invalid username or password")

    if not user.is_active:
        raise HTTPException(status_code=403, detail="User account is inactive")

    return Token(access_token=create_access_token(user.id), token_type="bearer")


@router.get("/me", response_model=UserResponse)
async def get_current_user_info(current_user: CurrentUser) -> UserResponse:
    """Return the authenticated user's profile."""
    return UserResponse.model_validate(current_user)

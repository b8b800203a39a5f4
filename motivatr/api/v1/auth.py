"""Signup and login."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from motivatr.auth.passwords import hash_password, verify_password
from motivatr.crud import crud_user
from motivatr.database import get_db
from motivatr.schemas.user import AuthResponse, LoginRequest, SignupRequest, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/signup", response_model=AuthResponse, status_code=201)
async def signup(
    body: SignupRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    if await crud_user.get_by_email(db, str(body.email)):
        raise HTTPException(400, "User already exists")
    user = await crud_user.create(db, obj_in=body, password_hash=hash_password(body.password))
    logger.info("Registered user %s", user.email)
    return AuthResponse(
        message="User registered successfully", user=UserResponse.model_validate(user)
    )


@router.post("/login", response_model=AuthResponse)
async def login(
    body: LoginRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    user = await crud_user.get_by_email(db, str(body.email))
    if user is None:
        raise HTTPException(400, "User not found")
    if not verify_password(body.password, user.password_hash):
        raise HTTPException(401, "Invalid credentials")
    return AuthResponse(message="Login successful", user=UserResponse.model_validate(user))

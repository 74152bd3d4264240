"""
JWT Authentication routes — register, login, me.

Tokens carry the user id in `sub`; every other /api route resolves the caller
from it via deps.get_current_user.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, ConfigDict
from passlib.context import CryptContext
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from moveplanner import config
from moveplanner.db import get_db
from moveplanner.api.deps import get_current_user
from moveplanner.models.orm_models import User
from moveplanner.models.schemas import EMAIL_RE
from moveplanner.services.errors import ValidationError

logger = logging.getLogger("moveplanner-api.auth")

_MIN_PASSWORD_LEN = 8


def _validate_email(email: str) -> str:
    """Normalize and validate email format. Raises ValidationError (400) on failure."""
    email = email.strip().lower()
    if not EMAIL_RE.match(email):
        raise ValidationError("Invalid email format")
    return email


def _validate_password(password: str) -> None:
    if len(password) < _MIN_PASSWORD_LEN:
        raise ValidationError(f"Password must be at least {_MIN_PASSWORD_LEN} characters")


router = APIRouter(prefix="/api/auth", tags=["Authentication"])

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class RegisterRequest(BaseModel):
    email: str
    password: str
    name: str
    phone: Optional[str] = None


class LoginRequest(BaseModel):
    email: str
    password: str


class UserRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str
    phone: Optional[str] = None
    role: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead


def create_access_token(data: dict) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + timedelta(minutes=config.ACCESS_TOKEN_EXPIRE_MINUTES)
    to_encode["exp"] = expire
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def _token_for(user: User) -> TokenResponse:
    token = create_access_token({"sub": user.id, "email": user.email, "role": user.role})
    return TokenResponse(access_token=token, user=UserRead.model_validate(user))


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(req: RegisterRequest, db: AsyncSession = Depends(get_db)):
    email = _validate_email(req.email)
    _validate_password(req.password)
    name = req.name.strip()
    if not name:
        raise ValidationError("Name is required")

    result = await db.execute(select(User).where(User.email == email))
    if result.scalar_one_or_none():
        raise ValidationError("Email already registered")

    user = User(
        email=email,
        password_hash=pwd_context.hash(req.password),
        name=name,
        phone=req.phone,
        role="customer",
    )
    db.add(user)
    await db.commit()
    logger.info(f"User registered: {user.id}")
    return _token_for(user)


@router.post("/login", response_model=TokenResponse)
async def login(req: LoginRequest, db: AsyncSession = Depends(get_db)):
    email = _validate_email(req.email)

    result = await db.execute(select(User).where(User.email == email))
    user = result.scalar_one_or_none()
    if not user or not pwd_context.verify(req.password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect email or password",
        )
    return _token_for(user)


@router.get("/me", response_model=UserRead)
async def get_me(current_user: User = Depends(get_current_user)):
    return current_user

"""FastAPI dependency injection — auth guard and per-request managers."""
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from moveplanner import config
from moveplanner.db import get_db
from moveplanner.db.store import MoveStore
from moveplanner.models.orm_models import User
from moveplanner.services.move_manager import MoveManager
from moveplanner.services.room_manager import RoomManager
from moveplanner.services.service_manager import ServiceManager

security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(security),
    db: AsyncSession = Depends(get_db),
) -> User:
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        payload = jwt.decode(credentials.credentials, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
        user_id: str = payload.get("sub")
        if not user_id:
            raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    result = await db.execute(select(User).where(User.id == user_id))
    user = result.scalar_one_or_none()
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def get_store(db: AsyncSession = Depends(get_db)) -> MoveStore:
    return MoveStore(db)


def get_move_manager(store: MoveStore = Depends(get_store)) -> MoveManager:
    return MoveManager(store)


def get_room_manager(store: MoveStore = Depends(get_store)) -> RoomManager:
    return RoomManager(store)


def get_service_manager(store: MoveStore = Depends(get_store)) -> ServiceManager:
    return ServiceManager(store)

"""Pydantic request / response schemas for the public API."""
import re
from datetime import date, datetime
from typing import Annotated, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import StringConstraints
from pydantic.alias_generators import to_camel

# Simple RFC-5322 subset email regex (no external library required)
EMAIL_RE = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
MoveStatus = Literal["draft", "confirmed", "completed", "cancelled"]


def normalize_email(value: str) -> str:
    value = value.strip().lower()
    if not EMAIL_RE.match(value):
        raise ValueError("Invalid email format")
    return value


class _CamelModel(BaseModel):
    """Accepts both camelCase (web client) and snake_case keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ─── Moves ───────────────────────────────────────────────────────────────────

class MoveCreate(BaseModel):
    customer_name: NonEmptyStr
    customer_email: str
    customer_phone: Optional[TrimmedStr] = None
    from_address: NonEmptyStr
    to_address: NonEmptyStr
    move_date: date
    move_time: Optional[TrimmedStr] = None
    special_requirements: Optional[TrimmedStr] = None

    @field_validator("customer_email")
    @classmethod
    def _email(cls, v):
        return normalize_email(v)


class MoveUpdate(BaseModel):
    """
    Partial update. Only keys present in the request body are written;
    `model_dump(exclude_unset=True)` yields exactly that set.
    """
    model_config = ConfigDict(extra="forbid")

    customer_name: Optional[NonEmptyStr] = None
    customer_email: Optional[str] = None
    customer_phone: Optional[TrimmedStr] = None
    from_address: Optional[NonEmptyStr] = None
    to_address: Optional[NonEmptyStr] = None
    move_date: Optional[date] = None
    move_time: Optional[TrimmedStr] = None
    special_requirements: Optional[TrimmedStr] = None
    status: Optional[MoveStatus] = None

    @field_validator("customer_name", "customer_email", "from_address", "to_address", "move_date", "status")
    @classmethod
    def _not_null(cls, v):
        # Only runs for supplied values; these columns are NOT NULL
        if v is None:
            raise ValueError("may not be null")
        return v

    @field_validator("customer_email")
    @classmethod
    def _email(cls, v):
        return normalize_email(v) if v is not None else v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class MoveRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    reference: str
    user_id: str
    customer_name: str
    customer_email: str
    customer_phone: Optional[str] = None
    from_address: str
    to_address: str
    move_date: date
    move_time: Optional[str] = None
    special_requirements: Optional[str] = None
    status: str
    total_volume: float = 0.0
    total_weight: float = 0.0
    estimated_cost: float = 0.0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class MoveCreatedResponse(BaseModel):
    message: str
    move: MoveRead
    rooms_added: int


# ─── Rooms ───────────────────────────────────────────────────────────────────

class RoomTypeRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    icon: str


class RoomCreate(_CamelModel):
    move_id: NonEmptyStr
    name: NonEmptyStr
    room_type: NonEmptyStr


class RoomUpdate(_CamelModel):
    name: NonEmptyStr
    room_type: NonEmptyStr


class RoomRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    move_id: str
    name: str
    room_type: str
    volume: float = 0.0
    created_at: Optional[datetime] = None


class StandardRoomsResponse(BaseModel):
    message: str
    rooms: list[RoomRead]


# ─── Furniture ───────────────────────────────────────────────────────────────

class FurnitureCategoryRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    room_type: str
    default_length: float
    default_width: float
    default_height: float
    default_weight: float


class FurnitureCreate(_CamelModel):
    """
    Required-field presence is checked by the manager (missing or falsy → 400),
    so everything but the room is optional at the schema level. Supplied
    dimensions follow the same bounds as FurnitureUpdate.
    """
    room_id: NonEmptyStr
    name: Optional[TrimmedStr] = None
    category: Optional[TrimmedStr] = None
    length: Optional[float] = Field(None, gt=0)
    width: Optional[float] = Field(None, gt=0)
    height: Optional[float] = Field(None, gt=0)
    quantity: Optional[int] = Field(None, ge=1)
    weight: Optional[float] = None
    is_custom: bool = False


class FurnitureUpdate(_CamelModel):
    """Full replacement: every dimension is expected on each update."""
    name: NonEmptyStr
    category: NonEmptyStr
    length: float = Field(..., gt=0)
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    quantity: int = Field(..., ge=1)
    weight: Optional[float] = None
    is_custom: bool = False


class FurnitureRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    room_id: str
    name: str
    category: str
    length: float
    width: float
    height: float
    quantity: int
    weight: float = 0.0
    volume: float = 0.0
    is_custom: bool = False
    created_at: Optional[datetime] = None


# ─── Services & materials ────────────────────────────────────────────────────

class ServiceCreate(_CamelModel):
    move_id: NonEmptyStr
    service_type: NonEmptyStr
    quantity: int = Field(1, ge=1)
    price: float = Field(0.0, ge=0)


class ServiceUpdate(_CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")

    service_type: Optional[NonEmptyStr] = None
    quantity: Optional[int] = Field(None, ge=1)
    price: Optional[float] = Field(None, ge=0)

    @field_validator("service_type", "quantity", "price")
    @classmethod
    def _not_null(cls, v):
        if v is None:
            raise ValueError("may not be null")
        return v

    def changes(self) -> dict:
        return self.model_dump(exclude_unset=True)


class ServiceRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    move_id: str
    service_type: str
    quantity: int
    price: float
    created_at: Optional[datetime] = None


class MaterialCreate(_CamelModel):
    move_id: NonEmptyStr
    material_type: NonEmptyStr
    quantity: int = Field(..., ge=0)
    price_per_unit: float = Field(0.0, ge=0)


class MaterialRead(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    move_id: str
    material_type: str
    quantity: int
    price_per_unit: float
    total_price: float
    created_at: Optional[datetime] = None


class ServiceCreatedResponse(BaseModel):
    message: str
    service: ServiceRead


class MaterialCreatedResponse(BaseModel):
    message: str
    material: MaterialRead


class MessageResponse(BaseModel):
    message: str

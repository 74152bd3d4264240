"""ORM Models for Move Planner — SQLAlchemy 2.0"""
import uuid
from datetime import datetime, date, timezone
from typing import Optional
from sqlalchemy import (
    String, Text, Boolean, Integer, Float, DateTime, Date,
    ForeignKey, Index, TypeDecorator
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func
from moveplanner.db import Base


def gen_uuid():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


class UTCDateTime(TypeDecorator):
    """Stores UTC and always reads back aware datetimes, also on SQLite which drops the offset."""
    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value


# ── AUTH ──────────────────────────────────────────────────────────────────────
class User(Base):
    __tablename__ = "users"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone: Mapped[Optional[str]] = mapped_column(String(50))
    role: Mapped[str] = mapped_column(String(50), default="customer")
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now(), onupdate=utcnow
    )
    moves: Mapped[list["Move"]] = relationship("Move", back_populates="owner")


# ── REFERENCE CATALOGS ────────────────────────────────────────────────────────
# Used to pre-populate choices only; Room.room_type and Furniture.category are free text.
class RoomType(Base):
    __tablename__ = "room_types"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    icon: Mapped[str] = mapped_column(String(16), nullable=False)


class FurnitureCategory(Base):
    __tablename__ = "furniture_categories"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    room_type: Mapped[str] = mapped_column(String(100), nullable=False)
    default_length: Mapped[float] = mapped_column(Float, nullable=False)   # cm
    default_width: Mapped[float] = mapped_column(Float, nullable=False)    # cm
    default_height: Mapped[float] = mapped_column(Float, nullable=False)   # cm
    default_weight: Mapped[float] = mapped_column(Float, nullable=False)   # kg


# ── MOVES ─────────────────────────────────────────────────────────────────────
class Move(Base):
    __tablename__ = "moves"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    reference: Mapped[str] = mapped_column(String(32), unique=True, nullable=False)
    user_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    customer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_email: Mapped[str] = mapped_column(String(255), nullable=False)
    customer_phone: Mapped[Optional[str]] = mapped_column(String(50))
    from_address: Mapped[str] = mapped_column(Text, nullable=False)
    to_address: Mapped[str] = mapped_column(Text, nullable=False)
    move_date: Mapped[date] = mapped_column(Date, nullable=False)
    move_time: Mapped[Optional[str]] = mapped_column(String(16))
    special_requirements: Mapped[Optional[str]] = mapped_column(Text)
    # Lifecycle: draft → confirmed → completed, draft|confirmed → cancelled (not enforced)
    status: Mapped[str] = mapped_column(String(20), default="draft")
    # Declared for future roll-ups; nothing recomputes these yet
    total_volume: Mapped[float] = mapped_column(Float, default=0.0)
    total_weight: Mapped[float] = mapped_column(Float, default=0.0)
    estimated_cost: Mapped[float] = mapped_column(Float, default=0.0)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    owner: Mapped["User"] = relationship("User", back_populates="moves")
    rooms: Mapped[list["Room"]] = relationship(
        "Room", back_populates="move", cascade="all, delete-orphan", passive_deletes=True
    )
    services: Mapped[list["Service"]] = relationship(
        "Service", back_populates="move", cascade="all, delete-orphan", passive_deletes=True
    )
    materials: Mapped[list["Material"]] = relationship(
        "Material", back_populates="move", cascade="all, delete-orphan", passive_deletes=True
    )


class Room(Base):
    __tablename__ = "rooms"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    move_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("moves.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    room_type: Mapped[str] = mapped_column(String(100), nullable=False)
    # Always Σ furniture.volume for this room (m³)
    volume: Mapped[float] = mapped_column(Float, default=0.0)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    move: Mapped["Move"] = relationship("Move", back_populates="rooms")
    furniture: Mapped[list["Furniture"]] = relationship(
        "Furniture", back_populates="room", cascade="all, delete-orphan", passive_deletes=True
    )


class Furniture(Base):
    __tablename__ = "furniture"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    room_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    length: Mapped[float] = mapped_column(Float, nullable=False)   # cm
    width: Mapped[float] = mapped_column(Float, nullable=False)    # cm
    height: Mapped[float] = mapped_column(Float, nullable=False)   # cm
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    weight: Mapped[float] = mapped_column(Float, default=0.0)      # kg
    volume: Mapped[float] = mapped_column(Float, default=0.0)      # m³
    is_custom: Mapped[bool] = mapped_column(Boolean, default=False)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    room: Mapped["Room"] = relationship("Room", back_populates="furniture")


# ── ANCILLARY ─────────────────────────────────────────────────────────────────
class Service(Base):
    __tablename__ = "services"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    move_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("moves.id", ondelete="CASCADE"), nullable=False, index=True
    )
    service_type: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=1)
    price: Mapped[float] = mapped_column(Float, default=0.0)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    move: Mapped["Move"] = relationship("Move", back_populates="services")


class Material(Base):
    __tablename__ = "materials"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    move_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("moves.id", ondelete="CASCADE"), nullable=False, index=True
    )
    material_type: Mapped[str] = mapped_column(String(100), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, default=0)
    price_per_unit: Mapped[float] = mapped_column(Float, default=0.0)
    # quantity × price_per_unit, fixed at insert time
    total_price: Mapped[float] = mapped_column(Float, default=0.0)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    move: Mapped["Move"] = relationship("Move", back_populates="materials")


# ── AUDIT ─────────────────────────────────────────────────────────────────────
class MoveHistory(Base):
    """Append-only audit trail. Reserved; no route writes to it yet."""
    __tablename__ = "move_history"
    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=gen_uuid)
    move_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("moves.id", ondelete="CASCADE"), nullable=False
    )
    action: Mapped[str] = mapped_column(String(50), nullable=False)
    changes: Mapped[Optional[str]] = mapped_column(Text)   # JSON blob
    user_id: Mapped[Optional[str]] = mapped_column(String(36), ForeignKey("users.id"))
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    __table_args__ = (Index("ix_move_history_move_id", "move_id"),)

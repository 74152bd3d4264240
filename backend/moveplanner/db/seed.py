"""
Reference data seeding — room types and furniture categories.

Idempotent: rows that already exist are skipped, so this runs on every startup.
"""
import logging
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from moveplanner.models.orm_models import RoomType, FurnitureCategory

logger = logging.getLogger("moveplanner-db.seed")


DEFAULT_ROOM_TYPES = [
    {"name": "Wohnzimmer", "icon": "🛋️"},
    {"name": "Schlafzimmer", "icon": "🛏️"},
    {"name": "Küche", "icon": "🍳"},
    {"name": "Bad", "icon": "🚿"},
    {"name": "Keller", "icon": "🏠"},
    {"name": "Dachboden", "icon": "🏠"},
    {"name": "Flur", "icon": "🚪"},
    {"name": "Arbeitszimmer", "icon": "💻"},
    {"name": "Kinderzimmer", "icon": "🧸"},
    {"name": "Gästezimmer", "icon": "🛏️"},
    {"name": "Abstellraum", "icon": "📦"},
    {"name": "Garten", "icon": "🌳"},
]

# Dimensions in cm, weight in kg
DEFAULT_FURNITURE_CATEGORIES = [
    {"name": "Sofa", "room_type": "Wohnzimmer", "default_length": 200, "default_width": 80, "default_height": 85, "default_weight": 80},
    {"name": "Fernseher", "room_type": "Wohnzimmer", "default_length": 120, "default_width": 70, "default_height": 5, "default_weight": 25},
    {"name": "Tisch", "room_type": "Wohnzimmer", "default_length": 140, "default_width": 80, "default_height": 75, "default_weight": 30},
    {"name": "Stühle", "room_type": "Wohnzimmer", "default_length": 45, "default_width": 45, "default_height": 90, "default_weight": 8},
    {"name": "Bett", "room_type": "Schlafzimmer", "default_length": 160, "default_width": 200, "default_height": 40, "default_weight": 60},
    {"name": "Kleiderschrank", "room_type": "Schlafzimmer", "default_length": 200, "default_width": 60, "default_height": 220, "default_weight": 100},
    {"name": "Nachttisch", "room_type": "Schlafzimmer", "default_length": 50, "default_width": 40, "default_height": 60, "default_weight": 15},
    {"name": "Kühlschrank", "room_type": "Küche", "default_length": 60, "default_width": 60, "default_height": 180, "default_weight": 80},
    {"name": "Herd", "room_type": "Küche", "default_length": 60, "default_width": 60, "default_height": 85, "default_weight": 50},
    {"name": "Spülmaschine", "room_type": "Küche", "default_length": 60, "default_width": 60, "default_height": 85, "default_weight": 45},
    {"name": "Waschbecken", "room_type": "Küche", "default_length": 60, "default_width": 60, "default_height": 85, "default_weight": 20},
    {"name": "Toilette", "room_type": "Bad", "default_length": 70, "default_width": 60, "default_height": 85, "default_weight": 25},
    {"name": "Dusche", "room_type": "Bad", "default_length": 80, "default_width": 80, "default_height": 200, "default_weight": 30},
    {"name": "Waschbecken", "room_type": "Bad", "default_length": 60, "default_width": 50, "default_height": 85, "default_weight": 15},
]


async def seed_room_types(session: AsyncSession) -> dict:
    """Insert any default room types that are missing (matched by name)."""
    stats = {"created": 0, "skipped": 0}
    result = await session.execute(select(RoomType.name))
    existing = set(result.scalars().all())

    for row in DEFAULT_ROOM_TYPES:
        if row["name"] in existing:
            stats["skipped"] += 1
            continue
        session.add(RoomType(**row))
        stats["created"] += 1

    await session.flush()
    return stats


async def seed_furniture_categories(session: AsyncSession) -> dict:
    """Insert any default furniture categories that are missing (matched by name + room type)."""
    stats = {"created": 0, "skipped": 0}
    result = await session.execute(select(FurnitureCategory.name, FurnitureCategory.room_type))
    existing = {(name, room_type) for name, room_type in result.all()}

    for row in DEFAULT_FURNITURE_CATEGORIES:
        if (row["name"], row["room_type"]) in existing:
            stats["skipped"] += 1
            continue
        session.add(FurnitureCategory(**row))
        stats["created"] += 1

    await session.flush()
    return stats


async def seed_reference_data(session: AsyncSession) -> dict:
    room_types = await seed_room_types(session)
    categories = await seed_furniture_categories(session)
    logger.info(
        f"Reference data seeded: room types {room_types['created']} new / {room_types['skipped']} existing, "
        f"furniture categories {categories['created']} new / {categories['skipped']} existing"
    )
    return {"room_types": room_types, "furniture_categories": categories}

"""
Runtime configuration — single source of truth for environment-driven settings.

Import from here rather than calling os.getenv() in individual modules.
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: str = "") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


# ── Database ──────────────────────────────────────────────────────────────────
DEFAULT_DATABASE_URL = "sqlite+aiosqlite:///./moveplanner.db"
DATABASE_URL: str = os.getenv("DATABASE_URL", "") or DEFAULT_DATABASE_URL
DB_ECHO: bool = _env_flag("DB_ECHO")
DB_RESET_ON_STARTUP: bool = _env_flag("DB_RESET_ON_STARTUP")

# ── Auth ──────────────────────────────────────────────────────────────────────
DEV_SECRET_KEY = "changethis_use_a_real_secret_in_production_64chars"
JWT_SECRET_KEY: str = os.getenv("JWT_SECRET_KEY", DEV_SECRET_KEY)
JWT_ALGORITHM: str = os.getenv("JWT_ALGORITHM", "HS256")
ACCESS_TOKEN_EXPIRE_MINUTES: int = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "480"))

# ── Moves ─────────────────────────────────────────────────────────────────────
# References look like UMZ-1A2B3C4D
MOVE_REFERENCE_PREFIX: str = os.getenv("MOVE_REFERENCE_PREFIX", "UMZ")
MOVE_REFERENCE_LENGTH: int = 8
MOVE_REFERENCE_MAX_ATTEMPTS: int = 5

# Rooms created for every new move, as (name, room_type)
STANDARD_ROOMS: list[tuple[str, str]] = [
    ("Wohnzimmer", "Wohnzimmer"),
    ("Schlafzimmer", "Schlafzimmer"),
    ("Küche", "Küche"),
    ("Bad", "Bad"),
    ("Flur", "Flur"),
]

MOVE_STATUSES: tuple[str, ...] = ("draft", "confirmed", "completed", "cancelled")

# ── HTTP ──────────────────────────────────────────────────────────────────────
_cors_default = "http://localhost:3000,http://localhost:5173"
CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", _cors_default).split(",") if o.strip()
]

# ── Logging ───────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON: bool = os.getenv("LOG_FORMAT", "json").lower() != "text"

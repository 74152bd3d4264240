"""
Move Planner API
FastAPI backend for household-move bookings: moves, rooms, furniture inventory
with derived room volumes, services and packing materials.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine
from moveplanner import config
from moveplanner.services.logging_config import setup_logging
from moveplanner.services.middleware import RequestTimingMiddleware, SecurityHeadersMiddleware
from moveplanner.api.error_handlers import register_error_handlers
from moveplanner.api.auth_routes import router as auth_router
from moveplanner.api.move_routes import router as move_router
from moveplanner.api.room_routes import router as room_router
from moveplanner.api.furniture_routes import router as furniture_router
from moveplanner.api.service_routes import router as service_router
from moveplanner import db as database

setup_logging(level=config.LOG_LEVEL, json_output=config.LOG_JSON)
logger = logging.getLogger("moveplanner-api")

VERSION = "1.0.0"


def create_app(database_engine: Optional[AsyncEngine] = None) -> FastAPI:
    """Build the application. Tests pass their own engine; production uses the configured one."""
    engine = database_engine or database.engine

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if config.JWT_SECRET_KEY == config.DEV_SECRET_KEY:
            logger.warning("JWT_SECRET_KEY not set, using the development secret")
        await database.init_db(engine)
        app.state.db_engine = engine
        yield
        await engine.dispose()

    app = FastAPI(
        title="Move Planner API",
        version=VERSION,
        description="Bookings, room inventories and volume estimates for household moves",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Authorization", "Content-Type", "Accept", "X-Requested-With"],
    )
    app.add_middleware(SecurityHeadersMiddleware)
    # Request timing + X-Request-ID must be outermost so it wraps all other middleware
    app.add_middleware(RequestTimingMiddleware)

    register_error_handlers(app)

    app.include_router(auth_router)
    app.include_router(move_router)
    app.include_router(room_router)
    app.include_router(furniture_router)
    app.include_router(service_router)

    @app.get("/health")
    async def health_check():
        db_connected = True
        try:
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
        except (SQLAlchemyError, OSError) as e:
            logger.warning(f"Health check could not reach the database: {e}")
            db_connected = False
        return {"status": "active", "version": VERSION, "db_connected": db_connected}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("moveplanner.main:app", host="0.0.0.0", port=8000, reload=True)

# airmates/main.py
from contextlib import asynccontextmanager
import logging

from fastapi.middleware.cors import CORSMiddleware
from fastapi import FastAPI
from sqlmodel import Session

from airmates.core.config import get_settings
from airmates.database import create_db_and_tables, engine, seed_event_types

# Import models so SQLModel metadata is populated before create_all()
from airmates.models import profile as _profile_models  # noqa: F401
from airmates.models import roommate as _roommate_models  # noqa: F401
from airmates.models import event as _event_models  # noqa: F401

# Routers
from airmates.routers.profiles import router as profiles_router
from airmates.routers.roommates import router as roommates_router
from airmates.routers.events import router as events_router

settings = get_settings()

logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger("uvicorn")


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup:
      - Verify DB connectivity and create tables.
      - Seed the default event types.
    """
    logger.info("🔄 Startup: Connecting to Supabase Postgres...")
    try:
        create_db_and_tables()
        with Session(engine) as session:
            added = seed_event_types(session)
        logger.info(f"✅ Startup: DB connection OK, tables verified, {added} event types seeded.")
    except Exception as e:
        logger.error(f"❌ Startup: DB connection FAILED: {e}")
        raise
    yield


app = FastAPI(
    title=settings.PROJECT_NAME or "AirMates API",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Versioned API prefix, e.g. /api/v1
app.include_router(profiles_router, prefix=settings.API_V1_STR)
app.include_router(roommates_router, prefix=settings.API_V1_STR)
app.include_router(events_router, prefix=settings.API_V1_STR)


@app.get("/")
def root():
    """Health check endpoint."""
    return {"status": "ok", "service": "airmates-backend"}

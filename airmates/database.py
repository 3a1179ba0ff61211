# airmates/database.py
from sqlmodel import SQLModel, create_engine, Session, select

from airmates.core.config import get_settings
from airmates.models.event import EventType

settings = get_settings()

# ---------------------------------------------------------
# Supabase Postgres connection (via pooler)
#
# - sslmode=require   : enforce SSL when running in the cloud
# - pool_size=1       : keep only 1 connection to the Supabase pooler
# - max_overflow=0    : do not open extra connections beyond the pool
# - pool_pre_ping=True: validate connections before using them
#
# Supabase Session mode limits the number of clients. If each backend
# process opens many connections (SQLAlchemy default pool_size 5+),
# you can easily hit:
#   "MaxClientsInSessionMode: max clients reached"
#
# Non-Postgres URLs (local SQLite) get the SQLAlchemy defaults.
# ---------------------------------------------------------

# Event types offered by the event form; seeded on startup.
DEFAULT_EVENT_TYPES = ("General", "Bill", "Rent", "Cleaning", "Groceries", "Other")


def _engine_options(db_url: str) -> tuple[str, dict]:
    if not db_url.startswith("postgres"):
        return db_url, {"echo": False}

    # Append sslmode=require if it is not already present
    if "sslmode=" not in db_url:
        if "?" in db_url:
            db_url = db_url + "&sslmode=require"
        else:
            db_url = db_url + "?sslmode=require"

    return db_url, {
        "echo": False,  # set to True if you want to debug SQL queries
        "pool_pre_ping": True,
        "pool_size": 1,
        "max_overflow": 0,
    }


db_url, engine_options = _engine_options(settings.DATABASE_URL)
engine = create_engine(db_url, **engine_options)


def create_db_and_tables() -> None:
    """
    Create all tables defined in SQLModel metadata if they do not exist.

    This is called once on application startup.
    """
    SQLModel.metadata.create_all(engine)


def seed_event_types(session: Session) -> int:
    """
    Insert any missing DEFAULT_EVENT_TYPES.

    Returns the number of rows inserted.
    """
    existing = set(session.exec(select(EventType.name)).all())
    missing = [name for name in DEFAULT_EVENT_TYPES if name not in existing]
    for name in missing:
        session.add(EventType(name=name))
    session.commit()
    return len(missing)


def get_session():
    """
    FastAPI dependency that yields a SQLModel Session.

    Usage:

        from fastapi import Depends

        @router.get("/example")
        def example_endpoint(session: Session = Depends(get_session)):
            ...
    """
    with Session(engine) as session:
        yield session

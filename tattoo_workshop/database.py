# tattoo_workshop/database.py
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from tattoo_workshop.core.config import get_settings

settings = get_settings()

# ---------------------------------------------------------
# Engine
#
# - SQLite (default): the reminder scheduler and the notification
#   worker use the engine from their own threads, so the
#   same-thread check must be off.
# - In-memory SQLite ("sqlite://"): a StaticPool keeps every
#   session on the one connection, otherwise each session would
#   see its own empty database.
# - Anything else: pool_pre_ping validates pooled connections.
# ---------------------------------------------------------

db_url = settings.DATABASE_URL

if db_url.startswith("sqlite"):
    engine_kwargs: dict = {"connect_args": {"check_same_thread": False}}
    if db_url in ("sqlite://", "sqlite:///:memory:"):
        engine_kwargs["poolclass"] = StaticPool
else:
    engine_kwargs = {"pool_pre_ping": True}

engine = create_engine(
    db_url,
    echo=False,
    **engine_kwargs,
)


def create_db_and_tables() -> None:
    """
    Create missing tables for every imported table model.

    Called from the app lifespan and the maintenance scripts; existing
    tables are never altered.
    """
    SQLModel.metadata.create_all(engine)


def get_session():
    """
    Request-scoped session dependency.

        @router.get("/customers")
        def list_customers(session: Session = Depends(get_session)): ...
    """
    with Session(engine) as session:
        yield session


def new_session() -> Session:
    """Open a standalone session for background threads (caller closes it)."""
    return Session(engine)

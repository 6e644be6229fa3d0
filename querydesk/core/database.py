from sqlalchemy import create_engine
from sqlmodel import SQLModel

from querydesk.core.config import settings

# Import all models to register them with SQLModel metadata
from querydesk.models import KvSlot  # noqa: F401


def _connect_args(url: str) -> dict:
    # SQLite connections are shared with the FastAPI threadpool
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


# Create database engine
engine = create_engine(
    settings.STORE_DB_URL,
    pool_pre_ping=True,
    future=True,
    connect_args=_connect_args(settings.STORE_DB_URL),
)


def init_db(bind=None):
    """Initialize database tables"""
    SQLModel.metadata.create_all(bind or engine)

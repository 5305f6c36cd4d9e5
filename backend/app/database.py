"""
Persistence layer for the rate console
Rate configuration lives in the database; every price is computed by
rate_engine from what is read here.
"""
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

from app.config import settings

Base = declarative_base()


def _is_memory_sqlite(url: str) -> bool:
    return url.startswith("sqlite") and (url.endswith(":memory:") or url.rstrip("/") == "sqlite:")


def build_engine(url: str, echo: bool = False) -> Engine:
    """
    Engine for a database URL.

    SQLite connections are shared across FastAPI worker threads; an
    in-memory SQLite database is pinned to a single connection so every
    session sees the same tables.
    """
    if not url.startswith("sqlite"):
        return create_engine(url, echo=echo)
    if _is_memory_sqlite(url):
        return create_engine(url, echo=echo, connect_args={"check_same_thread": False},
                             poolclass=StaticPool)
    return create_engine(url, echo=echo, connect_args={"check_same_thread": False})


engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    """Dependency: one session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = None):
    """Create the rate tables; file-backed SQLite switches to WAL journaling"""
    from app.models import orm  # noqa
    bind = bind or engine
    Base.metadata.create_all(bind=bind)

    if bind.dialect.name == "sqlite" and not _is_memory_sqlite(str(bind.url)):
        with bind.connect() as conn:
            conn.execute(text("PRAGMA journal_mode=WAL"))
            conn.execute(text("PRAGMA synchronous=NORMAL"))
            conn.commit()

# ============================================================================
# FILE: justvibe/db/session.py
# ============================================================================
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session
from typing import Generator
from justvibe.config import settings
import logging

logger = logging.getLogger(__name__)

def build_engine(database_url: str, echo: bool = False, **kwargs) -> Engine:
    """Create the store engine; SQLite gets foreign keys so cascades apply"""
    if database_url.startswith("sqlite"):
        connect_args = kwargs.pop("connect_args", {})
        connect_args.setdefault("check_same_thread", False)
        engine = create_engine(database_url, echo=echo, connect_args=connect_args, **kwargs)

        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, connection_record):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

        return engine
    return create_engine(database_url, echo=echo, pool_pre_ping=True, **kwargs)

# One engine per process, created from configuration at import time
engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db() -> Generator[Session, None, None]:
    """FastAPI dependency yielding one session per request"""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def init_db(bind: Engine = None) -> None:
    """Create any missing tables"""
    from justvibe.db.base import Base
    import justvibe.db.models  # noqa: F401  registers the mappers
    Base.metadata.create_all(bind=bind or engine)
    logger.info("Database tables ensured")

"""Database configuration and session management."""

from __future__ import annotations

from collections.abc import Generator

import logging

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker

from issue_changelog.config import get_settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


settings = get_settings()

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    """Create the SQLAlchemy engine for ``database_url``."""

    connect_args: dict[str, object] = {}
    if database_url.startswith("sqlite"):
        # Request handlers run on a worker thread pool.
        connect_args["check_same_thread"] = False
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


engine = build_engine(settings.database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def initialize_database(bind: Engine | None = None) -> None:
    """Ensure all ORM models have corresponding database tables."""

    from issue_changelog.infrastructure import models  # noqa: F401  # ensure models are imported

    target = bind or engine
    logger.debug("Creating missing tables on %s", target.url)
    Base.metadata.create_all(bind=target, checkfirst=True)


def get_db() -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

import logging
from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from docportal.db.base import Base

logger = logging.getLogger(__name__)


def build_engine(database_url: str) -> Engine:
    if not database_url:
        logger.error("DATABASE_URL is not configured. Set the DATABASE_URL env var.")
        raise RuntimeError("DATABASE_URL is not configured. Set the DATABASE_URL env var.")

    connect_args = {}
    # sync route handlers run in a thread pool
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False

    logger.info("Initializing DB engine (sqlite=%s)", bool(connect_args))
    return create_engine(database_url, pool_pre_ping=True, connect_args=connect_args)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def init_db(engine: Engine) -> None:
    """Create tables for every registered model."""
    # Import all models to ensure they're registered with Base
    import docportal.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready")


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

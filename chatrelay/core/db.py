# chatrelay/core/db.py
import logging
from contextlib import contextmanager
from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker, declarative_base, Session
from sqlalchemy.pool import StaticPool

from chatrelay.services.errors import StoreError

logger = logging.getLogger("chatrelay.db")

Base = declarative_base()


def build_engine(database_url: str) -> Engine:
    """Create the engine for `database_url`.

    SQLite needs check_same_thread False because FastAPI runs sync handlers
    in a threadpool; an in-memory database also needs a single shared
    connection or every session would see its own empty database.
    """
    kwargs = {"pool_pre_ping": True, "future": True}
    if database_url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        if ":memory:" in database_url or database_url.rstrip("/") == "sqlite:":
            kwargs["poolclass"] = StaticPool
    return create_engine(database_url, **kwargs)


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)


def create_all(engine: Engine) -> None:
    """Create all tables if they don't exist yet."""
    # Ensure models are imported so SQLAlchemy knows about them
    from chatrelay import models  # noqa: F401

    Base.metadata.create_all(bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency: one session per request from the app's factory."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def store_scope(db: Session) -> Generator[Session, None, None]:
    """Roll back and re-raise any SQLAlchemy failure as StoreError."""
    try:
        yield db
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("store error: %s", e)
        raise StoreError(str(e)) from e

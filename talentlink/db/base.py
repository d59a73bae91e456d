"""Database configuration, store registry and session management."""

import logging
from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool

from talentlink.config import Settings
from talentlink.errors import ConflictError, StoreError, ValidationError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


def _create_engine(url: str) -> Engine:
    if url.startswith("sqlite"):
        options = {"connect_args": {"check_same_thread": False}}
        if url in ("sqlite://", "sqlite:///:memory:"):
            # One shared connection, otherwise every session sees an empty database
            options["poolclass"] = StaticPool
        return create_engine(url, **options)
    return create_engine(
        url,
        pool_pre_ping=True,  # Test connections before use
        pool_recycle=300,  # Recycle connections after 5 minutes
    )


class StoreRegistry:
    """Engines and session factories keyed by logical database name.

    Built once at startup and attached to ``app.state.registry``. Engines are
    created on first use so the app can start without a configured database.
    """

    def __init__(self, urls: dict[str, str]):
        self._urls = dict(urls)
        self._engines: dict[str, Engine] = {}
        self._factories: dict[str, sessionmaker] = {}

    @classmethod
    def from_settings(cls, settings: Settings) -> "StoreRegistry":
        return cls({settings.database_name: settings.database_url})

    @property
    def names(self) -> list[str]:
        return list(self._urls)

    def get_engine(self, name: str) -> Engine:
        """Get or create the engine for ``name``."""
        if name not in self._urls:
            raise ValidationError(f"No database configured with name: {name}")
        if name not in self._engines:
            url = self._urls[name]
            if not url:
                raise ValueError("DATABASE_URL not configured")
            logger.info("Creating engine for database %s", name)
            self._engines[name] = _create_engine(url)
        return self._engines[name]

    def session_factory(self, name: str) -> sessionmaker:
        """Get or create the session factory for ``name``."""
        if name not in self._factories:
            self._factories[name] = sessionmaker(
                autocommit=False, autoflush=False, bind=self.get_engine(name)
            )
        return self._factories[name]

    def init_db(self) -> None:
        """Create tables in every configured database."""
        from talentlink.db import tables  # noqa: F401

        for name in self._urls:
            Base.metadata.create_all(bind=self.get_engine(name))

    def dispose(self) -> None:
        for name, engine in self._engines.items():
            logger.info("Disposing engine for database %s", name)
            engine.dispose()
        self._engines.clear()
        self._factories.clear()


def get_db(database: str, request: Request) -> Generator[Session, None, None]:
    """FastAPI dependency for a session on the ``{database}`` path segment."""
    registry: StoreRegistry = request.app.state.registry
    db = registry.session_factory(database)()
    try:
        yield db
    finally:
        db.close()


def _write(db: Session, step, action: str, context: dict) -> None:
    try:
        step()
    except IntegrityError as e:
        db.rollback()
        logger.warning("%s rejected by constraint %s: %s", action, context, e.orig)
        raise ConflictError(f"{action} violates a uniqueness constraint") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error("%s failed, no writes applied %s: %s", action, context, e)
        raise StoreError(f"{action} failed: storage error") from e


def flush(db: Session, action: str, **context) -> None:
    """Flush pending changes (assigns ids and defaults) without committing."""
    _write(db, db.flush, action, context)


def commit(db: Session, action: str, **context) -> None:
    """Commit the unit of work for ``action`` or roll it back and raise.

    ``context`` names the documents touched so a failed multi-document write
    can be reconciled from the logs.
    """
    _write(db, db.commit, action, context)

# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: CatalogDatabase.py
# -----------------------------------------------------------------------------
from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional
import logging

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from catalog.CatalogModels import Base
from utility.logging_utils import get_class_logger


def _is_sqlite_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:") or url.startswith("sqlite:///:memory:")


class CatalogDatabase:
    """
    Engine + session factory for the catalog.

    Usage:
        with db.session() as session:
            session.query(Product).all()

    Commits on success, rolls back on exception.
    """

    def __init__(self, database_url: str, *, echo: bool = False, logger: Optional[logging.Logger] = None):
        self.database_url = database_url
        self.logger = logger or get_class_logger(self.__class__)

        engine_kwargs: Dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
        if database_url.startswith("sqlite"):
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if _is_sqlite_memory(database_url):
                # One shared connection, otherwise every session sees an empty database
                engine_kwargs["poolclass"] = StaticPool
        else:
            engine_kwargs["pool_size"] = 5
            engine_kwargs["max_overflow"] = 10

        self.engine: Engine = create_engine(database_url, **engine_kwargs)
        self._session_factory = sessionmaker(
            bind=self.engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )
        self.logger.info("Catalog database engine created (dialect=%s)", self.engine.dialect.name)

    def create_schema(self) -> None:
        Base.metadata.create_all(self.engine)
        self.logger.info("Catalog schema ensured")

    def drop_schema(self) -> None:
        Base.metadata.drop_all(self.engine)

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self) -> None:
        self.engine.dispose()

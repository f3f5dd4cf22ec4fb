"""SQLAlchemy engine and session wiring for the relational store."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    pass


class Database:
    """Owns one engine/connection pool and hands out short-lived sessions.

    Built once by the application lifespan and passed down to the services
    that need it, so tests can construct isolated instances.
    """

    def __init__(
        self,
        url: str | None = None,
        *,
        engine: Engine | None = None,
        echo: bool = False,
    ) -> None:
        if engine is None:
            if not url:
                raise ValueError("Either a database URL or an engine is required")
            engine = create_engine(
                url,
                connect_args={"check_same_thread": False} if "sqlite" in url else {},
                echo=echo,
                pool_pre_ping=True,
            )
        self.engine = engine
        self._session_factory = sessionmaker(
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
            bind=engine,
        )

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def create_tables(self) -> None:
        # Imported for its side effect of registering the mapped tables
        from storefront.models import tables  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        self.engine.dispose()

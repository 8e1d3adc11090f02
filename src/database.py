from contextlib import contextmanager
from typing import Iterator, Optional

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from src.config import settings

Base = declarative_base()


class StorageContext:
    """Owns the engine and session factory for one process.

    Acquired once at startup, handed to every component that needs the
    database and disposed on shutdown.
    """

    def __init__(self, database_url: Optional[str] = None, echo: bool = False):
        self.database_url = database_url or settings.DATABASE_URL
        connect_args = {"check_same_thread": False} if self.database_url.startswith("sqlite") else {}
        self.engine: Engine = create_engine(self.database_url, connect_args=connect_args, echo=echo)
        self.SessionLocal = sessionmaker(bind=self.engine, autoflush=False, autocommit=False)

    def create_all(self):
        # models must be imported so their tables are registered on Base
        import src.models  # noqa: F401
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session(self) -> Iterator[Session]:
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def dispose(self):
        self.engine.dispose()


def get_storage(request: Request) -> StorageContext:
    """FastAPI dependency returning the application's storage context"""
    return request.app.state.storage


def get_db(request: Request) -> Iterator[Session]:
    """FastAPI dependency yielding a request-scoped session"""
    with get_storage(request).session() as db:
        yield db

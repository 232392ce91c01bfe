# ticketdesk/core/database.py
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path

from fastapi import Request
from loguru import logger
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker


class Base(DeclarativeBase):
    pass


class Database:
    """Engine plus session factory, built once per process and shared by requests."""

    def __init__(self, url: str, echo: bool = False):
        parsed = make_url(url)
        is_sqlite = parsed.drivername.startswith("sqlite")

        if is_sqlite and parsed.database and parsed.database != ":memory:":
            Path(parsed.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

        connect_args = {"check_same_thread": False} if is_sqlite else {}
        self.engine = create_engine(url, echo=echo, connect_args=connect_args)
        self.SessionLocal = sessionmaker(
            bind=self.engine, autocommit=False, autoflush=False, expire_on_commit=False
        )

    def create_all(self) -> None:
        # Register the mapped tables before creating them
        import ticketdesk.auth.models  # noqa: F401
        import ticketdesk.ticket.models  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def dispose(self) -> None:
        logger.debug("Disposing database engine")
        self.engine.dispose()

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        db = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()


# Common DB dependency
def get_db(request: Request) -> Generator[Session, None, None]:
    database: Database = request.app.state.db
    with database.session() as db:
        yield db

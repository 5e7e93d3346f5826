"""
Store engine and session factory.
The store holds every storage/view/form/operation/domain model; it is reached
by request handlers only through the `get_session` dependency.
"""
import logging
from typing import Any, Iterator, Optional

from sqlalchemy import create_engine, event, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from config import settings
from db.entities import Base

logger = logging.getLogger(__name__)


def enable_sqlite_foreign_keys(engine: Engine) -> None:
    """SQLite ignores FOREIGN KEY clauses unless asked per connection."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_conn, _record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(url: str, echo: bool = False) -> Engine:
    kwargs: dict[str, Any] = {"echo": echo, "pool_pre_ping": True}
    if url.startswith("sqlite"):
        # Route handlers run in FastAPI's threadpool.
        kwargs["connect_args"] = {"check_same_thread": False}
    store = create_engine(url, **kwargs)
    enable_sqlite_foreign_keys(store)
    return store


engine = build_engine(settings.DATABASE_URL, settings.DATABASE_ECHO)
SessionLocal = sessionmaker(bind=engine)


def get_session() -> Iterator[Session]:
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def init_db(bind: Optional[Engine] = None) -> None:
    """Create all store tables that do not exist yet."""
    target = bind or engine
    Base.metadata.create_all(target)
    logger.info("Store schema ready on %s", target.url.render_as_string(hide_password=True))


def ping(session: Session) -> bool:
    session.execute(text("SELECT 1"))
    return True

from collections.abc import Generator
from functools import lru_cache

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker

from ledgerly.config import get_settings


def create_db_engine(database_url: str, echo: bool = False, **engine_kwargs) -> Engine:
    """Create an engine with SQLite foreign key enforcement turned on."""
    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False  # SQLite specific

    engine = create_engine(
        database_url, echo=echo, connect_args=connect_args, **engine_kwargs
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_foreign_keys)
    return engine


def _enable_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ignores ON DELETE CASCADE unless enabled per connection
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@lru_cache
def get_engine() -> Engine:
    settings = get_settings()
    return create_db_engine(settings.database_url, echo=settings.db_echo)


@lru_cache
def get_session_factory() -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=get_engine())


def init_db(engine: Engine) -> None:
    """Create all tables that do not exist yet."""
    from ledgerly.models import Base

    Base.metadata.create_all(engine)


def get_db() -> Generator[Session, None, None]:
    """Dependency for FastAPI routes."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()

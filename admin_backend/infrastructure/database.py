"""SQLAlchemy engine, session factory and transaction helpers."""

from contextlib import contextmanager
from typing import Any, Dict, Generator, Iterator

from fastapi import Request
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, declarative_base, sessionmaker

# Isolation level giving both reads of a transaction the same snapshot
SNAPSHOT_ISOLATION: Dict[str, str] = {
    "postgresql": "REPEATABLE READ",
    "mysql": "REPEATABLE READ",
    "sqlite": "SERIALIZABLE",
}


Base = declarative_base()


def _begin_sqlite_transaction(conn) -> None:
    # pysqlite only opens a transaction before DML, so plain SELECTs would not share one
    conn.exec_driver_sql("BEGIN")


def build_engine(url: str, **kwargs: Any) -> Engine:
    if url.startswith("sqlite"):
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    engine = create_engine(url, pool_pre_ping=True, **kwargs)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "begin", _begin_sqlite_transaction)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a request-scoped session from the app's session factory and close it afterwards."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def snapshot(db: Session) -> Iterator[Session]:
    """Run the enclosed reads in one transaction on a single snapshot.

    When the session already has a transaction open, the reads simply join it
    (its isolation level was fixed when it began).
    """
    if db.in_transaction():
        yield db
        return

    level = SNAPSHOT_ISOLATION.get(db.get_bind().dialect.name)
    options = {"isolation_level": level} if level else {}
    with db.begin():
        db.connection(execution_options=options)
        yield db

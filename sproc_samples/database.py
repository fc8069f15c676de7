from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Union

from sqlalchemy import create_engine, text
from sqlalchemy.engine import URL, Engine, make_url
from sqlalchemy.orm import Session

from .config import settings

logger = logging.getLogger(__name__)


def create_engine_from_url(
    url: Union[str, URL], echo: bool | None = None
) -> Engine:
    """Build an engine; ``echo`` defaults to the ECHO_SQL setting."""
    if echo is None:
        echo = settings.echo_sql
    return create_engine(url, echo=echo, future=True)


def ensure_database(url: Union[str, URL]) -> bool:
    """Create the database named in ``url`` if it does not exist yet.

    Connects to ``master`` in autocommit mode because SQL Server refuses
    CREATE DATABASE inside a transaction. Returns True when the database
    was created by this call. Other backends are left alone.
    """
    url = make_url(url)
    if url.get_backend_name() != "mssql":
        return False
    name = url.database
    if not name or name == "master":
        return False

    admin_engine = create_engine(
        url.set(database="master"),
        isolation_level="AUTOCOMMIT",
        future=True,
    )
    try:
        with admin_engine.connect() as conn:
            exists = conn.execute(
                text("SELECT DB_ID(:name)"), {"name": name}
            ).scalar()
            if exists is not None:
                return False
            quoted = admin_engine.dialect.identifier_preparer.quote(name)
            conn.execute(text(f"CREATE DATABASE {quoted}"))
            logger.info("Created database %s", name)
            return True
    finally:
        admin_engine.dispose()


@contextmanager
def session_scope(engine: Engine) -> Iterator[Session]:
    """Provide a transactional scope around a series of operations."""
    session = Session(bind=engine, autoflush=False, future=True)
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

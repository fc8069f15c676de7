"""Reset database state between tests without recreating the database.

A :class:`Respawner` reflects the user tables once, works out a delete
order that respects foreign keys, and on every :meth:`Respawner.reset`
empties those tables and puts identity counters back to their seed so the
next test sees the same ids as a freshly deployed database.

Usage::

    respawner = Respawner.create(engine, tables_to_ignore=["alembic_version"])
    ...
    respawner.reset(engine)
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Sequence, Union

from sqlalchemy import MetaData, Table, text
from sqlalchemy.engine import Connection, Engine

from .database import create_engine_from_url

logger = logging.getLogger(__name__)

Bind = Union[Engine, str]

# Tables whose identity has been handed out at least once. A table that never
# had a row keeps last_value NULL and must not be reseeded, otherwise SQL
# Server would start it at seed - increment.
_MSSQL_USED_IDENTITIES = text(
    """
    SELECT OBJECT_SCHEMA_NAME(ic.object_id) AS schema_name,
           OBJECT_NAME(ic.object_id) AS table_name,
           CAST(ic.seed_value AS bigint) AS seed_value,
           CAST(ic.increment_value AS bigint) AS increment_value
    FROM sys.identity_columns ic
    WHERE ic.last_value IS NOT NULL
      AND OBJECTPROPERTY(ic.object_id, 'IsUserTable') = 1
    """
)


def _as_engine(bind: Bind) -> tuple[Engine, bool]:
    if isinstance(bind, Engine):
        return bind, False
    return create_engine_from_url(bind), True


class Respawner:
    def __init__(self, tables: Sequence[Table], dialect_name: str) -> None:
        self._tables = list(tables)
        self.dialect_name = dialect_name

    @property
    def tables(self) -> List[str]:
        """Names of the tables cleared by :meth:`reset`, in delete order."""
        return [t.name for t in self._tables]

    @classmethod
    def create(
        cls,
        bind: Bind,
        tables_to_ignore: Iterable[str] = (),
        schemas: Optional[Iterable[Optional[str]]] = None,
    ) -> "Respawner":
        """Reflect the user tables reachable through ``bind``.

        ``tables_to_ignore`` is matched case-insensitively against bare table
        names. ``schemas`` defaults to the connection's default schema.
        """
        ignored = {name.lower() for name in tables_to_ignore}
        engine, owned = _as_engine(bind)
        try:
            metadata = MetaData()
            for schema in schemas or (None,):
                metadata.reflect(bind=engine, schema=schema)
            # sorted_tables is parents first; deletes must go children first.
            tables = [
                t
                for t in reversed(metadata.sorted_tables)
                if t.name.lower() not in ignored
            ]
            logger.debug(
                "Respawner will clear %s", ", ".join(t.name for t in tables)
            )
            return cls(tables, engine.dialect.name)
        finally:
            if owned:
                engine.dispose()

    def reset(self, bind: Bind) -> None:
        """Delete every row from the tracked tables and restore identities."""
        engine, owned = _as_engine(bind)
        try:
            with engine.begin() as conn:
                if self.dialect_name == "postgresql":
                    self._truncate_postgresql(conn)
                else:
                    for table in self._tables:
                        conn.execute(table.delete())
                    if self.dialect_name == "mssql":
                        self._reseed_mssql(conn)
                    elif self.dialect_name == "sqlite":
                        self._reseed_sqlite(conn)
            logger.info("Reset %d table(s)", len(self._tables))
        finally:
            if owned:
                engine.dispose()

    def _truncate_postgresql(self, conn: Connection) -> None:
        if not self._tables:
            return
        preparer = conn.dialect.identifier_preparer
        names = ", ".join(preparer.format_table(t) for t in self._tables)
        conn.execute(text(f"TRUNCATE TABLE {names} RESTART IDENTITY CASCADE"))

    def _reseed_mssql(self, conn: Connection) -> None:
        tracked = {t.name.lower(): t for t in self._tables}
        preparer = conn.dialect.identifier_preparer
        for row in conn.execute(_MSSQL_USED_IDENTITIES).mappings():
            table = tracked.get(row["table_name"].lower())
            if table is None:
                continue
            if table.schema and table.schema.lower() != row["schema_name"].lower():
                continue
            reseed = row["seed_value"] - row["increment_value"]
            name = preparer.format_table(table).replace("'", "''")
            logger.debug("Reseeding %s to %d", name, reseed)
            conn.execute(
                text(f"DBCC CHECKIDENT ('{name}', RESEED, {int(reseed)})")
            )

    def _reseed_sqlite(self, conn: Connection) -> None:
        has_sequence = conn.execute(
            text(
                "SELECT 1 FROM sqlite_master "
                "WHERE type = 'table' AND name = 'sqlite_sequence'"
            )
        ).first()
        if has_sequence is None:
            return
        for table in self._tables:
            conn.execute(
                text("DELETE FROM sqlite_sequence WHERE name = :name"),
                {"name": table.name},
            )

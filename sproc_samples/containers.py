"""Ephemeral SQL Server for integration tests.

:class:`DatabaseFixture` owns one container for its whole lifetime: start
it, create the sample database, deploy the schema and hand out
``AwesomeDatabase`` contexts bound to a shared engine. Subclasses decide
how the schema gets there.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Generic, Optional, Sequence, TypeVar

from sqlalchemy.engine import Engine, make_url
from testcontainers.community.mssql import SqlServerContainer

from .config import Settings, settings as default_settings
from .database import create_engine_from_url, ensure_database

logger = logging.getLogger(__name__)

ContextT = TypeVar("ContextT")


class DatabaseFixture(ABC, Generic[ContextT]):
    tables_to_ignore: Sequence[str] = ()

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self._container = SqlServerContainer(
            self.settings.mssql_image,
            password=self.settings.sa_password,
            dbname="master",
        )
        self._connection_url: Optional[str] = None
        self._engine: Optional[Engine] = None

    @property
    def connection_url(self) -> str:
        if self._connection_url is None:
            raise RuntimeError("Database fixture has not been initialized")
        return self._connection_url

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise RuntimeError("Database fixture has not been initialized")
        return self._engine

    def initialize(self) -> None:
        """Start the container and deploy the schema.

        Any failure here aborts the caller; nothing is retried.
        """
        logger.info("Starting %s", self.settings.mssql_image)
        self._container.start()

        url = make_url(self._container.get_connection_url()).set(
            database=self.settings.database_name
        )
        self._connection_url = url.render_as_string(hide_password=False)

        ensure_database(url)
        self._engine = create_engine_from_url(url)
        self.deploy(self._engine)
        logger.info("Database %s is ready", self.settings.database_name)

    @abstractmethod
    def deploy(self, engine: Engine) -> None:
        """Put the schema into the freshly created database."""

    @abstractmethod
    def create_context(self) -> ContextT:
        """Return a new data-access context bound to :attr:`engine`."""

    def dispose(self) -> None:
        """Release the engine and stop the container.

        Safe to call after a partial :meth:`initialize`.
        """
        try:
            if self._engine is not None:
                self._engine.dispose()
                self._engine = None
        finally:
            logger.info("Stopping %s", self.settings.mssql_image)
            self._container.stop()

    def __enter__(self):
        try:
            self.initialize()
        except Exception:
            self.dispose()
            raise
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

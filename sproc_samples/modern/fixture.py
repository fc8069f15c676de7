from sqlalchemy.engine import Engine

from ..containers import DatabaseFixture
from .database import AwesomeDatabase
from .migrate import upgrade


class ModernDatabaseFixture(DatabaseFixture[AwesomeDatabase]):
    """SQL Server container migrated to the latest Alembic revision."""

    tables_to_ignore = ("alembic_version",)

    def deploy(self, engine: Engine) -> None:
        upgrade(engine)

    def create_context(self) -> AwesomeDatabase:
        return AwesomeDatabase(self.engine)

from sqlalchemy.engine import Engine

from ..containers import DatabaseFixture
from .database import AwesomeDatabase
from .schema import deploy_schema


class ClassicDatabaseFixture(DatabaseFixture[AwesomeDatabase]):
    """SQL Server container with the declarative schema applied."""

    def deploy(self, engine: Engine) -> None:
        deploy_schema(engine)

    def create_context(self) -> AwesomeDatabase:
        return AwesomeDatabase(self.engine)

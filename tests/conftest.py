import docker
import pytest
from docker.errors import DockerException
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from sproc_samples.classic.fixture import ClassicDatabaseFixture
from sproc_samples.modern.fixture import ModernDatabaseFixture
from sproc_samples.respawn import Respawner


def _docker_available() -> bool:
    try:
        client = docker.from_env()
        try:
            return bool(client.ping())
        finally:
            client.close()
    except DockerException:
        return False


@pytest.fixture(scope="session")
def require_docker():
    """Skip container-backed tests when no Docker daemon is reachable."""
    if not _docker_available():
        pytest.skip("Docker is not available for SQL Server integration tests")


@pytest.fixture(scope="class")
def classic_fixture(require_docker):
    """One SQL Server container per test class, schema deployed via create_all."""
    with ClassicDatabaseFixture() as fixture:
        yield fixture


@pytest.fixture(scope="class")
def modern_fixture(require_docker):
    """One SQL Server container per test class, schema deployed via Alembic."""
    with ModernDatabaseFixture() as fixture:
        yield fixture


def _respawn(fixture):
    respawner = Respawner.create(
        fixture.connection_url, tables_to_ignore=fixture.tables_to_ignore
    )
    yield respawner
    # Runs after every test, pass or fail.
    respawner.reset(fixture.connection_url)


@pytest.fixture()
def classic_respawner(classic_fixture):
    yield from _respawn(classic_fixture)


@pytest.fixture()
def modern_respawner(modern_fixture):
    yield from _respawn(modern_fixture)


@pytest.fixture()
def sqlite_engine():
    """In-memory SQLite shared across connections via StaticPool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    try:
        yield engine
    finally:
        engine.dispose()

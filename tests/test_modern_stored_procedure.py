import pytest
from sqlalchemy import inspect, text

from sproc_samples.mock_data import create_active_user, create_inactive_user
from sproc_samples.modern.migrate import current_revision, downgrade, upgrade
from sproc_samples.modern.models import User
from sproc_samples.modern.schemas import ActiveUser

pytestmark = pytest.mark.integration


@pytest.fixture()
def context(modern_fixture, modern_respawner):
    db = modern_fixture.create_context()
    try:
        yield db
    finally:
        db.close()


class TestModernStoredProcedure:
    def test_returns_only_active_users(self, context):
        active_user = create_active_user(User)
        inactive_user = create_inactive_user(User)

        context.add(active_user)
        context.add(inactive_user)
        context.save_changes()

        active_users = context.get_active_users()

        assert len(active_users) == 1
        assert isinstance(active_users[0], ActiveUser)
        assert active_users[0].name == active_user.name

    def test_respawn_between_tests(self, context):
        assert context.count_users() == 0

        context.add(create_active_user(User))
        context.add(create_inactive_user(User))
        context.add(create_active_user(User))
        context.save_changes()

        assert len(context.get_active_users()) == 2

    def test_alice_and_bob(self, context):
        context.add_all(
            [
                User(name="Alice", email="alice@example.com", is_active=True),
                User(name="Bob", email="bob@example.com", is_active=False),
            ]
        )
        context.save_changes()

        (user,) = context.get_active_users()

        assert user.name == "Alice"
        assert user.email == "alice@example.com"

    @pytest.mark.parametrize("active,inactive", [(1, 0), (0, 2), (4, 3)])
    def test_returns_exactly_the_active_count(self, context, active, inactive):
        context.add_all(create_active_user(User) for _ in range(active))
        context.add_all(create_inactive_user(User) for _ in range(inactive))
        context.save_changes()

        assert len(context.get_active_users()) == active

    def test_projection_has_no_active_flag(self, context):
        context.add(create_active_user(User))
        context.save_changes()

        (user,) = context.get_active_users()

        assert set(user.model_dump()) == {"id", "name", "email"}
        assert user.id == 1

    def test_result_is_read_only(self, context):
        context.add(create_active_user(User))
        context.save_changes()

        result = context.get_active_users()

        assert isinstance(result, tuple)
        with pytest.raises(ValueError):
            result[0].name = "changed"

    def test_reset_keeps_migration_history(self, modern_fixture, modern_respawner, context):
        assert "alembic_version" not in modern_respawner.tables
        assert "Users" in modern_respawner.tables

        modern_respawner.reset(modern_fixture.connection_url)
        modern_respawner.reset(modern_fixture.connection_url)

        assert context.count_users() == 0
        assert current_revision(modern_fixture.engine) == "0001_initial"

    def test_procedure_exists(self, modern_fixture):
        with modern_fixture.engine.connect() as conn:
            found = conn.execute(
                text("SELECT OBJECT_ID(N'GetActiveUsers', N'P')")
            ).scalar()

        assert found is not None

    def test_downgrade_then_upgrade(self, modern_fixture, context):
        downgrade(modern_fixture.engine)
        assert current_revision(modern_fixture.engine) is None
        assert not inspect(modern_fixture.engine).has_table("Users")

        upgrade(modern_fixture.engine)
        context.add(create_active_user(User))
        context.save_changes()

        assert current_revision(modern_fixture.engine) == "0001_initial"
        assert len(context.get_active_users()) == 1

from sqlalchemy import create_engine, func, select

from sproc_samples.modern.models import Base, User
from sproc_samples.seeds import main, seed


def test_seed_inserts_active_and_inactive_users(sqlite_engine):
    Base.metadata.create_all(sqlite_engine)

    users = seed(sqlite_engine, active=3, inactive=2)

    assert len(users) == 5
    assert all(u.id is not None for u in users)
    with sqlite_engine.connect() as conn:
        total = conn.scalar(select(func.count()).select_from(User))
        active = conn.scalar(
            select(func.count()).select_from(User).where(User.is_active.is_(True))
        )
    assert (total, active) == (5, 3)


def test_seed_nothing(sqlite_engine):
    Base.metadata.create_all(sqlite_engine)

    assert seed(sqlite_engine, active=0, inactive=0) == []


def test_main_seeds_the_given_database(tmp_path):
    url = f"sqlite:///{tmp_path / 'seed.db'}"
    engine = create_engine(url)
    Base.metadata.create_all(engine)

    main(["--url", url, "--active", "2", "--inactive", "4"])

    with engine.connect() as conn:
        assert conn.scalar(select(func.count()).select_from(User)) == 6
    engine.dispose()

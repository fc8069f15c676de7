from __future__ import annotations

import argparse
import logging
from typing import List

from sqlalchemy.engine import Engine

from .config import configure_logging, settings
from .database import create_engine_from_url, ensure_database, session_scope
from .mock_data import create_active_user, create_inactive_user
from .modern import migrate
from .modern.database import AwesomeDatabase
from .modern.models import User
from .respawn import Respawner

logger = logging.getLogger(__name__)


def seed(engine: Engine, active: int, inactive: int) -> List[User]:
    """Insert ``active`` active and ``inactive`` inactive fake users."""
    users = [create_active_user(User) for _ in range(active)]
    users += [create_inactive_user(User) for _ in range(inactive)]

    with session_scope(engine) as session:
        session.add_all(users)
        session.flush()  # assign ids before the session closes
        for user in users:
            session.expunge(user)

    logger.info("Seeded %d active and %d inactive users", active, inactive)
    return users


def main(argv: List[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Seed the Users table.")
    parser.add_argument(
        "--url",
        default=settings.database_url,
        help="SQLAlchemy database URL (default: DATABASE_URL).",
    )
    parser.add_argument(
        "--active",
        type=int,
        default=2,
        help="Number of active users to create (default: 2).",
    )
    parser.add_argument(
        "--inactive",
        type=int,
        default=1,
        help="Number of inactive users to create (default: 1).",
    )
    parser.add_argument(
        "--migrate",
        action="store_true",
        help="Create the database and apply migrations first.",
    )
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Clear all data tables (keeping alembic_version) before seeding.",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print the result of EXEC GetActiveUsers afterwards.",
    )
    args = parser.parse_args(argv)

    configure_logging(settings.log_level)

    if args.migrate:
        ensure_database(args.url)

    engine = create_engine_from_url(args.url)
    try:
        if args.migrate:
            migrate.upgrade(engine)
        if args.reset:
            Respawner.create(engine, tables_to_ignore=["alembic_version"]).reset(engine)

        seed(engine, active=args.active, inactive=args.inactive)

        if args.show:
            with AwesomeDatabase(engine) as db:
                for user in db.get_active_users():
                    print(f"{user.id}\t{user.name}\t{user.email}")
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()

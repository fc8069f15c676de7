"""Declarative schema deployment.

The ORM metadata is the schema package: applying it creates whatever is
missing and leaves existing objects alone, and the procedure is written
with CREATE OR ALTER so that re-deploying is a no-op.
"""

import logging

from sqlalchemy import text
from sqlalchemy.engine import Engine

from .models import CREATE_GET_ACTIVE_USERS, DROP_GET_ACTIVE_USERS, Base

logger = logging.getLogger(__name__)


def deploy_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        Base.metadata.create_all(bind=conn, checkfirst=True)
        conn.execute(text(CREATE_GET_ACTIVE_USERS))
    logger.info("Deployed declarative schema to %s", engine.url.database)


def drop_schema(engine: Engine) -> None:
    with engine.begin() as conn:
        conn.execute(text(DROP_GET_ACTIVE_USERS))
        Base.metadata.drop_all(bind=conn, checkfirst=True)
    logger.info("Dropped declarative schema from %s", engine.url.database)

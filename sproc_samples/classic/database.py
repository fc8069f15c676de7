from __future__ import annotations

from typing import Iterable, List, Union

from sqlalchemy import text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Query, Session

from ..config import settings
from ..database import create_engine_from_url
from .models import User

GET_ACTIVE_USERS = text("EXEC GetActiveUsers")


class AwesomeDatabase:
    """Session wrapper exposing the ``GetActiveUsers`` stored procedure.

    ``bind`` may be an engine shared with other contexts, or a URL; an engine
    built from a URL belongs to this object and is disposed on close.
    """

    def __init__(self, bind: Union[Engine, str, None] = None) -> None:
        if isinstance(bind, Engine):
            self._engine = bind
            self._owns_engine = False
        else:
            self._engine = create_engine_from_url(bind or settings.database_url)
            self._owns_engine = True
        self.session = Session(bind=self._engine, autoflush=False)

    @property
    def users(self) -> Query:
        return self.session.query(User)

    def add(self, user: User) -> None:
        self.session.add(user)

    def add_all(self, users: Iterable[User]) -> None:
        self.session.add_all(users)

    def save_changes(self) -> None:
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise

    def get_active_users(self) -> List[User]:
        """Run the stored procedure and map each row onto ``User``."""
        return self.session.query(User).from_statement(GET_ACTIVE_USERS).all()

    def count_users(self) -> int:
        return self.users.count()

    def close(self) -> None:
        self.session.close()
        if self._owns_engine:
            self._engine.dispose()

    def __enter__(self) -> "AwesomeDatabase":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

from __future__ import annotations

from typing import Iterable, Tuple, Union

from sqlalchemy import func, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from ..config import settings
from ..database import create_engine_from_url
from .models import User
from .schemas import ActiveUser

GET_ACTIVE_USERS = text("EXEC GetActiveUsers")


class AwesomeDatabase:
    """Data-access wrapper for the modern sample.

    Same contract as the classic one, but :meth:`get_active_users` returns
    read-only ``ActiveUser`` projections instead of tracked ORM objects.
    """

    def __init__(self, bind: Union[Engine, str, None] = None) -> None:
        if isinstance(bind, Engine):
            self._engine: Engine = bind
            self._owns_engine = False
        else:
            self._engine = create_engine_from_url(bind or settings.database_url)
            self._owns_engine = True
        self.session = Session(bind=self._engine, autoflush=False)

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

    def get_active_users(self) -> Tuple[ActiveUser, ...]:
        rows = self.session.execute(GET_ACTIVE_USERS).mappings().all()
        return tuple(ActiveUser.model_validate(dict(row)) for row in rows)

    def count_users(self) -> int:
        return self.session.scalar(select(func.count()).select_from(User)) or 0

    def close(self) -> None:
        self.session.close()
        if self._owns_engine:
            self._engine.dispose()

    def __enter__(self) -> "AwesomeDatabase":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

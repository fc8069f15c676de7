from __future__ import annotations

from sqlalchemy import BigInteger, Boolean, Integer, Unicode
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    pass


class User(Base):
    __tablename__ = "Users"

    # SQLite only autoincrements an INTEGER primary key.
    id: Mapped[int] = mapped_column(
        "Id", BigInteger().with_variant(Integer, "sqlite"), primary_key=True
    )
    name: Mapped[str] = mapped_column("Name", Unicode, nullable=False)
    email: Mapped[str] = mapped_column("Email", Unicode, nullable=False)
    is_active: Mapped[bool] = mapped_column(
        "IsActive", Boolean, default=False, nullable=False
    )

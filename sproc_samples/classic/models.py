from sqlalchemy import Boolean, Column, Integer, Unicode
from sqlalchemy.orm import declarative_base

Base = declarative_base()

CREATE_GET_ACTIVE_USERS = """
CREATE OR ALTER PROCEDURE GetActiveUsers
AS
BEGIN
  SELECT *
  FROM Users
  WHERE IsActive = 1
END
"""

DROP_GET_ACTIVE_USERS = "DROP PROCEDURE IF EXISTS GetActiveUsers"


class User(Base):
    """A user row. Column names follow the SQL Server schema (PascalCase)."""

    __tablename__ = "Users"

    id = Column("Id", Integer, primary_key=True)
    name = Column("Name", Unicode, nullable=False)
    email = Column("Email", Unicode, nullable=False)
    is_active = Column("IsActive", Boolean, nullable=False, default=False)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, is_active={self.is_active!r})"

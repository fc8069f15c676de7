"""Initial schema: Users table and GetActiveUsers procedure

Revision ID: 0001_initial
Revises: 
Create Date: 2025-02-25
"""

from alembic import op
import sqlalchemy as sa


revision = "0001_initial"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "Users",
        sa.Column(
            "Id",
            sa.BigInteger(),
            sa.Identity(start=1, increment=1),
            nullable=False,
        ),
        sa.Column("Name", sa.Unicode(), nullable=False),
        sa.Column("Email", sa.Unicode(), nullable=False),
        sa.Column("IsActive", sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint("Id", name="PK_Users"),
    )

    op.execute(
        """
CREATE PROCEDURE GetActiveUsers
AS
BEGIN
  SELECT *
  FROM Users
  WHERE IsActive = 1
END
"""
    )


def downgrade() -> None:
    op.execute("DROP PROCEDURE GetActiveUsers")
    op.drop_table("Users")

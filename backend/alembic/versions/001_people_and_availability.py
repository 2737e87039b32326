"""Create people and availability.

One availability row per (person_id, date); the composite primary key makes
duplicate inserts collapse. people.name_key is unique so first logins for the same
name (case-insensitive) cannot create two identities.
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "people",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("name_key", sa.String(128), nullable=False),
        sa.Column("color", sa.String(16), nullable=False),
        sa.Column("secret", sa.String(256), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_people_name_key", "people", ["name_key"], unique=True)

    op.create_table(
        "availability",
        sa.Column("person_id", sa.String(36), sa.ForeignKey("people.id"), primary_key=True),
        sa.Column("date", sa.String(10), primary_key=True),
    )


def downgrade() -> None:
    op.drop_table("availability")
    op.drop_index("ix_people_name_key", table_name="people")
    op.drop_table("people")

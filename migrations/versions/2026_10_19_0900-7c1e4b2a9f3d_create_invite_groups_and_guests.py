"""create invite_groups and guests tables

Revision ID: 7c1e4b2a9f3d
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "7c1e4b2a9f3d"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "invite_groups",
        sa.Column("uuid", sa.UUID(), nullable=False, server_default=sa.func.gen_random_uuid()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("locked", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.PrimaryKeyConstraint("uuid", name="pk_invite_groups"),
    )

    op.create_table(
        "guests",
        sa.Column("uuid", sa.UUID(), nullable=False, server_default=sa.func.gen_random_uuid()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.current_timestamp(),
            nullable=False,
        ),
        sa.Column("invite_group_id", sa.UUID(), nullable=False),
        sa.Column("first_name", sa.String(255), nullable=True),
        sa.Column("last_name", sa.String(255), nullable=True),
        sa.Column("is_plus_one", sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column("attending", sa.Boolean(), nullable=True),
        sa.Column("dietary_restrictions", sa.Text(), nullable=True),
        sa.Column("submission_id", sa.UUID(), nullable=True),
        sa.PrimaryKeyConstraint("uuid", name="pk_guests"),
        sa.ForeignKeyConstraint(
            ["invite_group_id"],
            ["invite_groups.uuid"],
            name="fk_guests_invite_group_id_invite_groups",
            ondelete="CASCADE",
        ),
    )

    op.create_index("ix_guests_invite_group_id", "guests", ["invite_group_id"])
    op.create_index("ix_guests_first_name", "guests", ["first_name"])
    op.create_index("ix_guests_last_name", "guests", ["last_name"])


def downgrade() -> None:
    op.drop_index("ix_guests_last_name", table_name="guests")
    op.drop_index("ix_guests_first_name", table_name="guests")
    op.drop_index("ix_guests_invite_group_id", table_name="guests")

    op.drop_table("guests")
    op.drop_table("invite_groups")

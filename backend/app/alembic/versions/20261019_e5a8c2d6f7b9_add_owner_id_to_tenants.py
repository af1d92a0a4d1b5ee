"""add owner_id to tenants

Revision ID: e5a8c2d6f7b9
Revises: d4f7b1c5e6a8
Create Date: 2026-10-19 00:00:04.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "e5a8c2d6f7b9"
down_revision = "d4f7b1c5e6a8"
branch_labels = None
depends_on = None


def upgrade() -> None:
    with op.batch_alter_table("tenants") as batch_op:
        batch_op.add_column(sa.Column("owner_id", sa.String(length=36), nullable=True))
        batch_op.create_index("ix_tenants_owner_id", ["owner_id"])
        batch_op.create_foreign_key(
            "fk_tenants_owner_id_clients", "clients", ["owner_id"], ["id"], ondelete="RESTRICT"
        )


def downgrade() -> None:
    with op.batch_alter_table("tenants") as batch_op:
        batch_op.drop_constraint("fk_tenants_owner_id_clients", type_="foreignkey")
        batch_op.drop_index("ix_tenants_owner_id")
        batch_op.drop_column("owner_id")

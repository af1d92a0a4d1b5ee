"""create orders and promo_code_usages tables

Revision ID: c3e6a9b4d5f7
Revises: b2d5f8a3c4e6
Create Date: 2026-10-19 00:00:02.000000

"""

import sqlalchemy as sa
from alembic import op

# revision identifiers, used by Alembic.
revision = "c3e6a9b4d5f7"
down_revision = "b2d5f8a3c4e6"
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "orders",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("tenant_id", sa.String(length=36), nullable=False),
        sa.Column("client_id", sa.String(length=36), nullable=False),
        sa.Column("order_number", sa.String(length=32), nullable=False),
        sa.Column("subtotal", sa.Integer(), nullable=False),
        sa.Column("delivery_fee", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("promo_code_id", sa.String(length=36), nullable=True),
        sa.Column("promo_discount", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("grand_total", sa.Integer(), nullable=False),
        sa.Column(
            "status", sa.String(length=30), nullable=False, server_default="pending_payment"
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
        ),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["promo_code_id"], ["promo_codes.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_orders_tenant_id", "orders", ["tenant_id"])
    op.create_index("ix_orders_client_id", "orders", ["client_id"])
    op.create_index("ix_orders_order_number", "orders", ["order_number"], unique=True)

    op.create_table(
        "promo_code_usages",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("promo_code_id", sa.String(length=36), nullable=False),
        sa.Column("order_id", sa.String(length=36), nullable=False),
        sa.Column("client_id", sa.String(length=36), nullable=False),
        sa.Column("discount_amount", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("(CURRENT_TIMESTAMP)"),
        ),
        sa.ForeignKeyConstraint(["promo_code_id"], ["promo_codes.id"], ondelete="RESTRICT"),
        sa.ForeignKeyConstraint(["order_id"], ["orders.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["client_id"], ["clients.id"], ondelete="RESTRICT"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint(
            "promo_code_id", "order_id", name="uq_promo_code_usages_code_order"
        ),
    )
    op.create_index(
        "ix_promo_code_usages_promo_code_id", "promo_code_usages", ["promo_code_id"]
    )
    op.create_index("ix_promo_code_usages_order_id", "promo_code_usages", ["order_id"])
    op.create_index("ix_promo_code_usages_client_id", "promo_code_usages", ["client_id"])


def downgrade() -> None:
    op.drop_index("ix_promo_code_usages_client_id", table_name="promo_code_usages")
    op.drop_index("ix_promo_code_usages_order_id", table_name="promo_code_usages")
    op.drop_index("ix_promo_code_usages_promo_code_id", table_name="promo_code_usages")
    op.drop_table("promo_code_usages")
    op.drop_index("ix_orders_order_number", table_name="orders")
    op.drop_index("ix_orders_client_id", table_name="orders")
    op.drop_index("ix_orders_tenant_id", table_name="orders")
    op.drop_table("orders")

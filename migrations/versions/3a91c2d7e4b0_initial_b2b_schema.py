"""initial b2b schema

Revision ID: 3a91c2d7e4b0
Revises:
Create Date: 2026-10-19 09:12:41.118204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3a91c2d7e4b0'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    ]


def upgrade():
    op.create_table(
        "b2b_customers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("shopify_customer_id", sa.String(), nullable=True, unique=True),
        sa.Column("email", sa.String(), nullable=False, unique=True),
        sa.Column("first_name", sa.String(), nullable=True),
        sa.Column("last_name", sa.String(), nullable=True),
        sa.Column("company_name", sa.String(), nullable=True),
        sa.Column("phone", sa.String(), nullable=True),
        sa.Column("business_type", sa.String(), nullable=True),
        sa.Column("tax_id", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True, server_default="pending"),
        sa.Column("rejection_reason", sa.String(), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        sa.Column("group_id", sa.Integer(), nullable=True),
        sa.Column("discount_percentage", sa.Float(), nullable=True, server_default="0"),
        sa.Column("minimum_order_value", sa.Float(), nullable=True),
        sa.Column("maximum_order_value", sa.Float(), nullable=True),
        sa.Column("payment_terms", sa.String(), nullable=True, server_default="immediate"),
        *_timestamps(),
    )
    op.create_index("ix_b2b_customers_email", "b2b_customers", ["email"])
    op.create_index("ix_b2b_customers_status", "b2b_customers", ["status"])
    op.create_index("ix_b2b_customers_group_id", "b2b_customers", ["group_id"])

    op.create_table(
        "customer_groups",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False, unique=True),
        sa.Column("description", sa.String(), nullable=True),
        sa.Column("discount_percentage", sa.Float(), nullable=True, server_default="0"),
        sa.Column("minimum_order_value", sa.Float(), nullable=True),
        sa.Column("maximum_order_value", sa.Float(), nullable=True),
        sa.Column("payment_terms", sa.String(), nullable=True, server_default="immediate"),
        sa.Column("auto_approve", sa.Boolean(), nullable=True, server_default=sa.false()),
        *_timestamps(),
    )

    op.create_table(
        "pricing_rules",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("type", sa.String(), nullable=False),
        sa.Column("value", sa.Float(), nullable=False),
        sa.Column("applies_to", sa.String(), nullable=True, server_default="all"),
        sa.Column("product_ids", sa.JSON(), nullable=True),
        sa.Column("collection_ids", sa.JSON(), nullable=True),
        sa.Column("customer_group_id", sa.Integer(), nullable=True),
        sa.Column("customer_id", sa.Integer(), nullable=True),
        sa.Column("min_quantity", sa.Integer(), nullable=True, server_default="1"),
        sa.Column("max_quantity", sa.Integer(), nullable=True),
        sa.Column("start_date", sa.DateTime(), nullable=True),
        sa.Column("end_date", sa.DateTime(), nullable=True),
        sa.Column("priority", sa.Integer(), nullable=True, server_default="0"),
        sa.Column("active", sa.Boolean(), nullable=True, server_default=sa.true()),
        *_timestamps(),
    )
    op.create_index("ix_pricing_rules_active", "pricing_rules", ["active"])
    op.create_index("ix_pricing_rules_customer_id", "pricing_rules", ["customer_id"])
    op.create_index("ix_pricing_rules_customer_group_id", "pricing_rules", ["customer_group_id"])

    op.create_table(
        "quote_requests",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("customer_id", sa.Integer(), nullable=True, server_default="0"),
        sa.Column("customer_email", sa.String(), nullable=False),
        sa.Column("company_name", sa.String(), nullable=True),
        sa.Column("products", sa.JSON(), nullable=True),
        sa.Column("quantities", sa.JSON(), nullable=True),
        sa.Column("message", sa.String(), nullable=True),
        sa.Column("status", sa.String(), nullable=True, server_default="pending"),
        sa.Column("quote_amount", sa.Float(), nullable=True),
        sa.Column("quote_valid_until", sa.DateTime(), nullable=True),
        sa.Column("quote_notes", sa.String(), nullable=True),
        sa.Column("responded_by", sa.String(), nullable=True),
        sa.Column("responded_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_quote_requests_status", "quote_requests", ["status"])

    op.create_table(
        "b2b_orders",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("shopify_order_id", sa.String(), nullable=True, unique=True),
        sa.Column("order_number", sa.String(), nullable=True),
        sa.Column("customer_id", sa.Integer(), nullable=False),
        sa.Column("total_amount", sa.Float(), nullable=False),
        sa.Column("approval_status", sa.String(), nullable=True, server_default="pending"),
        sa.Column("rejection_reason", sa.String(), nullable=True),
        sa.Column("approved_by", sa.String(), nullable=True),
        sa.Column("approved_at", sa.DateTime(), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_b2b_orders_approval_status", "b2b_orders", ["approval_status"])

    op.create_table(
        "app_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("key", sa.String(), nullable=False, unique=True),
        sa.Column("value", sa.String(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
    )


def downgrade():
    op.drop_table("app_settings")
    op.drop_index("ix_b2b_orders_approval_status", table_name="b2b_orders")
    op.drop_table("b2b_orders")
    op.drop_index("ix_quote_requests_status", table_name="quote_requests")
    op.drop_table("quote_requests")
    op.drop_index("ix_pricing_rules_customer_group_id", table_name="pricing_rules")
    op.drop_index("ix_pricing_rules_customer_id", table_name="pricing_rules")
    op.drop_index("ix_pricing_rules_active", table_name="pricing_rules")
    op.drop_table("pricing_rules")
    op.drop_table("customer_groups")
    op.drop_index("ix_b2b_customers_group_id", table_name="b2b_customers")
    op.drop_index("ix_b2b_customers_status", table_name="b2b_customers")
    op.drop_index("ix_b2b_customers_email", table_name="b2b_customers")
    op.drop_table("b2b_customers")

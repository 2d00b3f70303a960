"""initial schema

Revision ID: 3f9a1c7d2b10
Revises:
Create Date: 2026-10-19

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "3f9a1c7d2b10"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    bind = op.get_bind()
    existing_tables = sa.inspect(bind).get_table_names()

    if "users" not in existing_tables:
        op.create_table(
            "users",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("email", sa.String(length=255), nullable=False),
            sa.Column("phone", sa.String(length=20), nullable=True),
            sa.Column("password_hash", sa.String(length=255), nullable=True),
            sa.Column("role", sa.String(length=20), nullable=False, server_default="seller"),
            sa.Column("gst_no", sa.String(length=15), nullable=True),
            sa.Column("shop_name", sa.String(length=255), nullable=True),
            sa.Column("address", sa.Text(), nullable=True),
            sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
            sa.Column("rejection_reason", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
        )
        op.create_index("ix_users_email", "users", ["email"], unique=True)
        op.create_index("ix_users_status", "users", ["status"])

    if "categories" not in existing_tables:
        op.create_table(
            "categories",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("image_url", sa.String(length=500), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
        )
        op.create_index("ix_categories_name", "categories", ["name"])

    if "products" not in existing_tables:
        op.create_table(
            "products",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("category_id", sa.String(length=36), sa.ForeignKey("categories.id", ondelete="SET NULL"), nullable=True),
            sa.Column("name", sa.String(length=255), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("price", sa.Numeric(10, 2), nullable=False),
            sa.Column("unit", sa.String(length=50), nullable=True),
            sa.Column("image_url", sa.String(length=500), nullable=True),
            sa.Column("stock", sa.Integer(), nullable=False, server_default="0"),
            sa.Column("discount", sa.Numeric(5, 2), nullable=False, server_default="0"),
            sa.Column("seller_id", sa.String(length=36), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.CheckConstraint("stock >= 0", name="check_stock_non_negative"),
            sa.CheckConstraint("price >= 0", name="check_price_non_negative"),
            sa.CheckConstraint("discount >= 0 AND discount <= 100", name="check_discount_percentage"),
        )
        op.create_index("ix_products_name", "products", ["name"])
        op.create_index("ix_products_category_id", "products", ["category_id"])
        op.create_index("ix_products_seller_id", "products", ["seller_id"])

    if "kyc_documents" not in existing_tables:
        op.create_table(
            "kyc_documents",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("document_type", sa.String(length=20), nullable=False),
            sa.Column("document_url", sa.String(length=500), nullable=False),
            sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
            sa.Column("rejection_reason", sa.Text(), nullable=True),
            sa.Column("reviewed_at", sa.DateTime(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
        )
        op.create_index("ix_kyc_documents_user_id", "kyc_documents", ["user_id"])
        op.create_index("ix_kyc_documents_status", "kyc_documents", ["status"])

    if "orders" not in existing_tables:
        op.create_table(
            "orders",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("user_id", sa.String(length=36), sa.ForeignKey("users.id"), nullable=False),
            sa.Column("total_amount", sa.Numeric(12, 2), nullable=False),
            sa.Column("status", sa.String(length=20), nullable=False, server_default="pending"),
            sa.Column("created_at", sa.DateTime(), nullable=False),
            sa.Column("updated_at", sa.DateTime(), nullable=False),
            sa.CheckConstraint("total_amount >= 0", name="check_total_amount_non_negative"),
        )
        op.create_index("ix_orders_user_id", "orders", ["user_id"])
        op.create_index("ix_orders_status", "orders", ["status"])

    if "order_items" not in existing_tables:
        op.create_table(
            "order_items",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("order_id", sa.String(length=36), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
            sa.Column("product_id", sa.String(length=36), sa.ForeignKey("products.id", ondelete="SET NULL"), nullable=True),
            sa.Column("quantity", sa.Integer(), nullable=False),
            sa.Column("price", sa.Numeric(10, 2), nullable=False),
            sa.CheckConstraint("quantity > 0", name="check_quantity_positive"),
            sa.CheckConstraint("price >= 0", name="check_item_price_non_negative"),
        )
        op.create_index("ix_order_items_order_id", "order_items", ["order_id"])

    if "order_status_history" not in existing_tables:
        op.create_table(
            "order_status_history",
            sa.Column("id", sa.String(length=36), primary_key=True),
            sa.Column("order_id", sa.String(length=36), sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
            sa.Column("from_status", sa.String(length=20), nullable=True),
            sa.Column("status", sa.String(length=20), nullable=False),
            sa.Column("changed_by", sa.String(length=36), sa.ForeignKey("users.id"), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=False),
        )
        op.create_index("ix_order_status_history_order_id", "order_status_history", ["order_id"])


def downgrade() -> None:
    for table in (
        "order_status_history",
        "order_items",
        "orders",
        "kyc_documents",
        "products",
        "categories",
        "users",
    ):
        op.drop_table(table)

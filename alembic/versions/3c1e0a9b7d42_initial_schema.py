"""initial schema

Revision ID: 3c1e0a9b7d42
Revises:
Create Date: 2026-10-19 16:40:00

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "3c1e0a9b7d42"
down_revision = None
branch_labels = None
depends_on = None


table_status = sa.Enum("AVAILABLE", "OCCUPIED", name="table_status")
payment_method = sa.Enum("CASH", "BANKING", name="payment_method")
payment_status = sa.Enum("PENDING", "PAID", "CANCELLED", name="payment_status")
discount_type = sa.Enum("PERCENT", "AMOUNT", name="discount_type")


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(50), nullable=False, unique=True),
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("username", sa.String(50), nullable=True, unique=True),
        sa.Column("full_name", sa.String(128), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("role_id", sa.Integer, sa.ForeignKey("roles.id"), nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"])

    op.create_table(
        "dining_tables",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("number", sa.Integer, nullable=False),
        sa.Column("status", table_status, nullable=False, server_default="AVAILABLE"),
    )

    op.create_table(
        "addresses",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("address_line", sa.String(255), nullable=False),
    )

    op.create_table(
        "products",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.Column("img_url", sa.String(255), nullable=True),
        sa.Column("stock_qty", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "sizes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(32), nullable=True),
    )

    op.create_table(
        "add_ons",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.String(64), nullable=True),
    )

    op.create_table(
        "product_sizes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("product_id", sa.Integer, sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("size_id", sa.Integer, sa.ForeignKey("sizes.id"), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.UniqueConstraint("product_id", "size_id"),
    )

    op.create_table(
        "product_add_ons",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("product_id", sa.Integer, sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("add_on_id", sa.Integer, sa.ForeignKey("add_ons.id"), nullable=False),
        sa.Column("price", sa.Numeric(12, 2), nullable=True),
        sa.UniqueConstraint("product_id", "add_on_id"),
    )

    op.create_table(
        "orders",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="PENDING"),
        sa.Column("customer_id", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("shipper_id", sa.Integer, sa.ForeignKey("users.id"), nullable=True),
        sa.Column("table_id", sa.Integer, sa.ForeignKey("dining_tables.id"), nullable=True),
        sa.Column("address_id", sa.Integer, sa.ForeignKey("addresses.id"), nullable=True),
        sa.Column("total_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("subtotal_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("shipping_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("discount_amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("note", sa.Text, nullable=True),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime, server_default=sa.func.now(), nullable=True),
    )
    op.create_index("ix_orders_status", "orders", ["status"])
    op.create_index("ix_orders_customer_id", "orders", ["customer_id"])

    op.create_table(
        "order_details",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("order_id", sa.Integer, sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("product_id", sa.Integer, sa.ForeignKey("products.id", ondelete="SET NULL"), nullable=True),
        sa.Column("size_id", sa.Integer, sa.ForeignKey("sizes.id"), nullable=True),
        sa.Column("product_name_snapshot", sa.String(128), nullable=True),
        sa.Column("quantity", sa.Integer, nullable=False, server_default="1"),
        sa.Column("unit_price", sa.Numeric(12, 2), nullable=True),
        sa.Column("line_total", sa.Numeric(12, 2), nullable=True),
    )

    op.create_table(
        "order_detail_add_ons",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "order_detail_id", sa.Integer, sa.ForeignKey("order_details.id", ondelete="CASCADE"), nullable=False
        ),
        sa.Column("add_on_id", sa.Integer, sa.ForeignKey("add_ons.id", ondelete="SET NULL"), nullable=True),
        sa.Column("unit_price_snapshot", sa.Numeric(12, 2), nullable=True),
    )

    op.create_table(
        "payments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("order_id", sa.Integer, sa.ForeignKey("orders.id", ondelete="CASCADE"), nullable=False),
        sa.Column("method", payment_method, nullable=True),
        sa.Column("amount", sa.Numeric(12, 2), nullable=True),
        sa.Column("status", payment_status, nullable=False, server_default="PENDING"),
        sa.Column("created_at", sa.DateTime, server_default=sa.func.now(), nullable=False),
    )

    op.create_table(
        "discount_codes",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("code", sa.String(64), nullable=False, unique=True),
        sa.Column("active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("starts_at", sa.DateTime, nullable=True),
        sa.Column("ends_at", sa.DateTime, nullable=True),
        sa.Column("discount_type", discount_type, nullable=False),
        sa.Column("discount_value", sa.Numeric(12, 2), nullable=False),
        sa.Column("min_order_amount", sa.Numeric(12, 2), nullable=True),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("discount_codes")
    op.drop_table("payments")
    op.drop_table("order_detail_add_ons")
    op.drop_table("order_details")
    op.drop_index("ix_orders_customer_id", table_name="orders")
    op.drop_index("ix_orders_status", table_name="orders")
    op.drop_table("orders")
    op.drop_table("product_add_ons")
    op.drop_table("product_sizes")
    op.drop_table("add_ons")
    op.drop_table("sizes")
    op.drop_table("products")
    op.drop_table("addresses")
    op.drop_table("dining_tables")
    op.drop_index("ix_users_username", table_name="users")
    op.drop_table("users")
    op.drop_table("roles")

    bind = op.get_bind()
    for enum_type in (discount_type, payment_status, payment_method, table_status):
        enum_type.drop(bind, checkfirst=True)

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "0001_create_schema"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps(*, updated: bool = False) -> list[sa.Column]:
    columns = [sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False))
    return columns


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("name", sa.String(80), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(), nullable=False),
        sa.Column("weekly_report", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("click_alerts", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_users_id", "users", ["id"])
    op.create_index("ix_users_name", "users", ["name"], unique=True)
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "storefronts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("title", sa.String(160), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("domain", sa.String(255), nullable=True, unique=True),
        sa.Column("logo_url", sa.Text(), nullable=True),
        sa.Column("banner_url", sa.Text(), nullable=True),
        sa.Column("primary_color", sa.String(32), nullable=False),
        sa.Column("accent_color", sa.String(32), nullable=False),
        sa.Column("background_color", sa.String(32), nullable=False),
        sa.Column("text_color", sa.String(32), nullable=False),
        sa.Column("font_family", sa.String(120), nullable=False),
        sa.Column("theme_id", sa.String(64), nullable=False),
        *_timestamps(updated=True),
    )
    op.create_index("ix_storefronts_id", "storefronts", ["id"])
    op.create_index("ix_storefronts_user_id", "storefronts", ["user_id"], unique=True)

    op.create_table(
        "storefront_settings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column(
            "storefront_id",
            sa.Integer(),
            sa.ForeignKey("storefronts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("template_id", sa.String(64), nullable=True),
        sa.Column("theme_id", sa.String(64), nullable=True),
        sa.Column("template_overrides", sa.JSON(), nullable=True),
        sa.Column("branding_assets", sa.JSON(), nullable=True),
        sa.Column("layout", sa.JSON(), nullable=True),
        sa.Column("typography", sa.JSON(), nullable=True),
        sa.Column("sections", sa.JSON(), nullable=True),
        sa.Column("custom_css", sa.Text(), nullable=True),
        sa.Column("social_links", sa.JSON(), nullable=True),
        sa.Column("collab_highlights", sa.JSON(), nullable=True),
        sa.Column("subscriber_block", sa.JSON(), nullable=True),
        *_timestamps(updated=True),
        sa.UniqueConstraint("user_id", name="ux_storefront_settings_user_id"),
    )
    op.create_index("ix_storefront_settings_user_id", "storefront_settings", ["user_id"])
    op.create_index("ix_storefront_settings_storefront_id", "storefront_settings", ["storefront_id"])

    op.create_table(
        "products",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "storefront_id",
            sa.Integer(),
            sa.ForeignKey("storefronts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("image_url", sa.Text(), nullable=True),
        sa.Column("affiliate_url", sa.Text(), nullable=False),
        sa.Column("clicks", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_products_storefront_id", "products", ["storefront_id"])
    op.create_index("ix_products_storefront_created", "products", ["storefront_id", "created_at"])

    op.create_table(
        "click_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("product_id", sa.Integer(), sa.ForeignKey("products.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="SET NULL"), nullable=True),
        *_timestamps(),
    )
    op.create_index("ix_click_events_product_id", "click_events", ["product_id"])
    op.create_index("ix_click_events_created_at", "click_events", ["created_at"])

    op.create_table(
        "collections",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "storefront_id",
            sa.Integer(),
            sa.ForeignKey("storefronts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("slug", sa.String(140), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("storefront_id", "name", name="uq_collections_storefront_name"),
    )
    op.create_index("ix_collections_storefront_id", "collections", ["storefront_id"])

    op.create_table(
        "subscribers",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column(
            "storefront_id",
            sa.Integer(),
            sa.ForeignKey("storefronts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(120), nullable=False, server_default=""),
        sa.Column("tags", sa.JSON(), nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("storefront_id", "email", name="uq_subscribers_storefront_email"),
    )
    op.create_index("ix_subscribers_storefront_id", "subscribers", ["storefront_id"])

    op.create_table(
        "email_templates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("design", sa.JSON(), nullable=False),
        sa.Column("html", sa.Text(), nullable=False),
        sa.Column("thumbnail", sa.Text(), nullable=False, server_default=""),
        *_timestamps(updated=True),
    )
    op.create_index("ix_email_templates_user_id", "email_templates", ["user_id"])

    op.create_table(
        "saved_templates",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.String(120), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("settings", sa.JSON(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
    )
    op.create_index("ix_saved_templates_user_id", "saved_templates", ["user_id"])


def downgrade() -> None:
    for table in (
        "saved_templates",
        "email_templates",
        "subscribers",
        "collections",
        "click_events",
        "products",
        "storefront_settings",
        "storefronts",
        "users",
    ):
        op.drop_table(table)

"""Card schema — profiles, business_cards, social_links.

Revision ID: 001_card_schema
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_card_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "profiles",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("avatar_url", sa.String(2048), nullable=True),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )

    op.create_table(
        "business_cards",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("user_id", sa.Uuid, sa.ForeignKey("profiles.id", ondelete="CASCADE"), nullable=False),
        sa.Column("slug", sa.String(64), nullable=True),
        sa.Column("title", sa.String(200), nullable=True),
        sa.Column("company", sa.String(200), nullable=True),
        sa.Column("bio", sa.Text, nullable=True),
        sa.Column("position", sa.String(200), nullable=True),
        sa.Column("avatar_url", sa.String(2048), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("whatsapp", sa.String(50), nullable=True),
        sa.Column("email", sa.String(320), nullable=True),
        sa.Column("website", sa.String(2048), nullable=True),
        sa.Column("address", sa.Text, nullable=True),
        sa.Column("map_url", sa.String(2048), nullable=True),
        sa.Column("theme", sa.JSON, nullable=True),
        sa.Column("shape", sa.String(20), nullable=False, server_default="rectangle"),
        sa.Column("layout", sa.JSON, nullable=True),
        sa.Column("is_published", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint("slug", name="uq_business_cards_slug"),
    )
    op.create_index("ix_business_cards_user_id", "business_cards", ["user_id"])

    op.create_table(
        "social_links",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("card_id", sa.Uuid, sa.ForeignKey("business_cards.id", ondelete="CASCADE"), nullable=False),
        sa.Column("platform", sa.String(50), nullable=False),
        sa.Column("username", sa.String(200), nullable=True),
        sa.Column("url", sa.Text, nullable=False),
        sa.Column("display_order", sa.Integer, nullable=False, server_default="0"),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_social_links_card_id", "social_links", ["card_id"])


def downgrade() -> None:
    op.drop_index("ix_social_links_card_id", table_name="social_links")
    op.drop_table("social_links")
    op.drop_index("ix_business_cards_user_id", table_name="business_cards")
    op.drop_table("business_cards")
    op.drop_table("profiles")

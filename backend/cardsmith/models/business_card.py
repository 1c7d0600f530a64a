"""BusinessCard ORM — persists one card configuration.

Invariants:
    - slug is unique across all cards (NULL allowed for cards without a username)
    - theme/layout are opaque JSON; shape of the JSON is validated on load by core/row_mapping.py
    - Deleting a card deletes its social links (ORM cascade + ON DELETE CASCADE)
    - updated_at refreshed on every UPDATE

Design Decisions:
    - Column names follow the store vocabulary (bio, position, slug, map_url);
      the rename to model names lives in core/row_mapping.py only
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Boolean, DateTime, JSON, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cardsmith.db.base import Base


def _now() -> datetime:
    return datetime.now(timezone.utc)


class BusinessCard(Base):
    """Business card aggregate root — owns its social links."""
    __tablename__ = "business_cards"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("profiles.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    slug: Mapped[str | None] = mapped_column(
        String(64), nullable=True, unique=True,
    )

    # Identity
    title: Mapped[str | None] = mapped_column(String(200), nullable=True)
    company: Mapped[str | None] = mapped_column(String(200), nullable=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    position: Mapped[str | None] = mapped_column(String(200), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # Contact
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    whatsapp: Mapped[str | None] = mapped_column(String(50), nullable=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    website: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    map_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)

    # Presentation
    theme: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    shape: Mapped[str] = mapped_column(
        String(20), nullable=False, default="rectangle",
    )
    layout: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    is_published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_now, onupdate=_now,
    )

    # Relationships
    owner: Mapped["Profile"] = relationship(
        "Profile", back_populates="cards",
    )
    links: Mapped[list["SocialLink"]] = relationship(
        "SocialLink", back_populates="card",
        cascade="all, delete-orphan", lazy="selectin",
        order_by="SocialLink.display_order",
    )

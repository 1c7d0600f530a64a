"""SocialLink ORM — one entry of a card's ordered link list.

Invariants:
    - Always belongs to a BusinessCard (card_id FK, cascade on delete)
    - url is non-nullable; platform is free text (registry names or custom)
    - display_order is the position at save time; rows are rewritten on every save
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, Integer, Boolean, DateTime, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cardsmith.db.base import Base


class SocialLink(Base):
    """Social link entity."""
    __tablename__ = "social_links"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    card_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("business_cards.id", ondelete="CASCADE"),
        nullable=False, index=True,
    )
    platform: Mapped[str] = mapped_column(String(50), nullable=False)
    username: Mapped[str | None] = mapped_column(String(200), nullable=True)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    display_order: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0,
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    card: Mapped["BusinessCard"] = relationship(
        "BusinessCard", back_populates="links",
    )

"""Profile ORM — owner identity row, written by the external auth collaborator.

Invariants:
    - id equals the auth provider's user id
    - One profile owns zero or more business cards
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from cardsmith.db.base import Base


class Profile(Base):
    """Card owner."""
    __tablename__ = "profiles"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(2048), nullable=True)
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="user",
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    cards: Mapped[list["BusinessCard"]] = relationship(
        "BusinessCard", back_populates="owner",
        cascade="all, delete-orphan", passive_deletes=True,
    )

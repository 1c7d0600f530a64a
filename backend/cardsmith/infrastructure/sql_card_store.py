"""SQL Card Store — CardStore implementation over an async SQLAlchemy session.

Invariants:
    - Rows leave this module as plain dicts keyed by column name
    - Writes flush but never commit; the service commits once per save/delete
    - replace_links() deletes every existing link of the card, then inserts the new rows
    - IntegrityError -> StoreConflict, any other SQLAlchemyError -> StoreUnavailable;
      the session is rolled back before the mapped error is raised

Design Decisions:
    - Link replacement goes through the ORM collection (delete-orphan), so the
      identity map never holds links that were deleted behind its back
"""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, AsyncGenerator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from cardsmith.core.domain_types import CardId, OwnerId
from cardsmith.core.errors import StoreConflict
from cardsmith.infrastructure.database import map_store_error
from cardsmith.models.business_card import BusinessCard
from cardsmith.models.profile import Profile
from cardsmith.models.social_link import SocialLink

logger = logging.getLogger(__name__)

_CARD_COLUMNS = tuple(c.key for c in BusinessCard.__table__.columns)
_LINK_COLUMNS = tuple(c.key for c in SocialLink.__table__.columns)
_CARD_WRITABLE = frozenset(_CARD_COLUMNS) - {"id", "created_at", "updated_at"}
_LINK_WRITABLE = frozenset({"platform", "username", "url", "display_order", "is_active"})


def card_to_row(card: BusinessCard) -> dict[str, Any]:
    return {key: getattr(card, key) for key in _CARD_COLUMNS}


def link_to_row(link: SocialLink) -> dict[str, Any]:
    return {key: getattr(link, key) for key in _LINK_COLUMNS}


class SqlCardStore:
    """Business card persistence on one AsyncSession (one request / unit of work)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    @asynccontextmanager
    async def _guard(
        self, operation: str, card_id: Any = None,
    ) -> AsyncGenerator[None, None]:
        try:
            yield
        except SQLAlchemyError as e:
            await self.db.rollback()
            error = map_store_error(e, operation)
            if card_id is not None:
                error.context.card_id = str(card_id)
            log = logger.warning if isinstance(error, StoreConflict) else logger.error
            log(
                f"Store failure during {operation}: {e}",
                extra={"operation": operation, "card_id": card_id, "error_code": error.code},
            )
            raise error from e

    # ─── Reads ───────────────────────────────────────────────────

    async def get_profile(self, owner_id: OwnerId) -> dict[str, Any] | None:
        async with self._guard("load"):
            profile = await self.db.get(Profile, owner_id)
        if profile is None:
            return None
        return {
            "id": profile.id, "email": profile.email, "name": profile.name,
            "avatar_url": profile.avatar_url, "role": profile.role,
            "created_at": profile.created_at,
        }

    async def get_card(self, card_id: CardId) -> dict[str, Any] | None:
        async with self._guard("load", card_id):
            card = await self.db.get(BusinessCard, card_id)
        return card_to_row(card) if card else None

    async def get_card_by_slug(self, slug: str) -> dict[str, Any] | None:
        async with self._guard("load"):
            result = await self.db.execute(
                select(BusinessCard).where(BusinessCard.slug == slug),
            )
            card = result.scalar_one_or_none()
        return card_to_row(card) if card else None

    async def list_cards_by_owner(self, owner_id: OwnerId) -> list[dict[str, Any]]:
        async with self._guard("load"):
            result = await self.db.execute(
                select(BusinessCard)
                .where(BusinessCard.user_id == owner_id)
                .order_by(BusinessCard.created_at.desc()),
            )
            cards = result.scalars().all()
        return [card_to_row(c) for c in cards]

    async def get_links_by_card(self, card_id: CardId) -> list[dict[str, Any]]:
        async with self._guard("load", card_id):
            result = await self.db.execute(
                select(SocialLink)
                .where(SocialLink.card_id == card_id)
                .order_by(SocialLink.display_order, SocialLink.created_at),
            )
            links = result.scalars().all()
        return [link_to_row(link) for link in links]

    # ─── Writes ──────────────────────────────────────────────────

    async def insert_card(self, card_row: dict[str, Any]) -> dict[str, Any]:
        values = {k: v for k, v in card_row.items() if k in _CARD_WRITABLE}
        if card_row.get("id") is not None:
            values["id"] = card_row["id"]
        card = BusinessCard(**values, links=[])
        async with self._guard("save"):
            self.db.add(card)
            await self.db.flush()
        logger.info("Card inserted", extra={"card_id": card.id, "owner_id": card.user_id})
        return card_to_row(card)

    async def update_card(
        self, card_id: CardId, card_row: dict[str, Any],
    ) -> dict[str, Any] | None:
        async with self._guard("save", card_id):
            card = await self.db.get(BusinessCard, card_id)
            if card is None:
                return None
            for key, value in card_row.items():
                if key in _CARD_WRITABLE:
                    setattr(card, key, value)
            card.updated_at = datetime.now(timezone.utc)
            await self.db.flush()
        return card_to_row(card)

    async def delete_card(self, card_id: CardId) -> bool:
        async with self._guard("delete", card_id):
            card = await self.db.get(BusinessCard, card_id)
            if card is None:
                return False
            await self.db.refresh(card, ["links"])
            await self.db.delete(card)
            await self.db.flush()
        logger.info("Card deleted", extra={"card_id": card_id})
        return True

    async def replace_links(
        self, card_id: CardId, link_rows: list[dict[str, Any]],
    ) -> list[dict[str, Any]]:
        async with self._guard("save", card_id):
            card = await self.db.get(BusinessCard, card_id)
            if card is None:
                raise StoreConflict("Card vanished before links were written", "save")
            await self.db.refresh(card, ["links"])
            card.links = [
                SocialLink(**{k: v for k, v in row.items() if k in _LINK_WRITABLE})
                for row in link_rows
            ]
            await self.db.flush()
            links = list(card.links)
        return [link_to_row(link) for link in links]

    async def commit(self) -> None:
        async with self._guard("commit"):
            await self.db.commit()

    async def rollback(self) -> None:
        await self.db.rollback()

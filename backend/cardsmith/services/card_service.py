"""Card Service — load / save / delete protocol around the pure card core.

Invariants:
    - save() serializes config + links BEFORE its first await; edits made while a save
      is pending are not part of it
    - save() order: card row upsert (insert when id is None, else update), then full
      replacement of the link rows, then one commit
    - A failed save rolls back and raises StoreUnavailable / StoreConflict; the caller's
      configuration value is untouched and can be resubmitted as-is (no retry here)
    - Published and unpublished cards alike must carry a slug not used by another card
    - load_public() resolves only published cards; everything else is CardNotFound
    - MalformedStoredValue notices from from_row() are logged, never raised

Design Decisions:
    - The service owns validation at the API boundary: a save that bypasses the
      disabled save action gets CardValidationError instead of a half-written row
"""

import logging
from typing import Sequence
from uuid import UUID

from cardsmith.core import card_config
from cardsmith.core.card_config import CardConfiguration
from cardsmith.core.domain_types import CardId, OwnerId
from cardsmith.core.errors import (
    CardNotFound, CardValidationError, CardsmithError, ErrorContext,
    MissingRequiredField, StoreConflict,
)
from cardsmith.core.repository_protocols import CardStore
from cardsmith.core.row_mapping import LoadedCard, from_row, to_row
from cardsmith.core.social_links import SocialLinkEntry

logger = logging.getLogger(__name__)


class CardService:
    """Async persistence adapter for one owner session."""

    def __init__(self, store: CardStore, require_slug: bool = True):
        self.store = store
        self.require_slug = require_slug

    # ─── Loading ─────────────────────────────────────────────────

    async def _hydrate(self, card_row: dict) -> LoadedCard:
        link_rows = await self.store.get_links_by_card(card_row["id"])
        loaded = from_row(card_row, link_rows)
        for issue in loaded.recovered:
            logger.warning(
                issue.message,
                extra={"card_id": card_row["id"], "operation": "load"},
            )
        return loaded

    async def new_card(self, owner_id: OwnerId) -> CardConfiguration:
        """Blank card seeded with the owner's profile name and email when known."""
        profile = await self.store.get_profile(owner_id) or {}
        return card_config.create(
            owner_id, email=profile.get("email") or "", title=profile.get("name") or "",
        )

    async def load(self, card_id: CardId, owner_id: OwnerId | None = None) -> LoadedCard:
        """Owner-scoped load when owner_id is given."""
        row = await self.store.get_card(card_id)
        if row is None or (owner_id is not None and row["user_id"] != owner_id):
            raise CardNotFound(str(card_id), ErrorContext(card_id=str(card_id)))
        return await self._hydrate(row)

    async def load_for_owner(self, owner_id: OwnerId) -> LoadedCard | None:
        """The owner's current (most recently created) card, if any."""
        rows = await self.store.list_cards_by_owner(owner_id)
        if not rows:
            return None
        return await self._hydrate(rows[0])

    async def list_for_owner(self, owner_id: OwnerId) -> list[LoadedCard]:
        rows = await self.store.list_cards_by_owner(owner_id)
        return [await self._hydrate(row) for row in rows]

    async def load_public(self, reference: str | UUID) -> LoadedCard:
        """Resolve /c/{id} or /{slug} to a published card.

        A string that parses as a UUID is tried as an id first and then as
        a slug, so a 32-hex username stays reachable.
        """
        row = None
        card_id = _as_uuid(reference)
        if card_id is not None:
            row = await self.store.get_card(CardId(card_id))
        if row is None and not isinstance(reference, UUID):
            slug = card_config.normalize_username(str(reference))
            if slug:
                row = await self.store.get_card_by_slug(slug)
        if row is None or not row.get("is_published"):
            raise CardNotFound(str(reference))
        return await self._hydrate(row)

    # ─── Saving ──────────────────────────────────────────────────

    def check_can_save(self, config: CardConfiguration) -> None:
        result = card_config.validate_for_save(config, self.require_slug)
        missing = list(result.missing)
        if config.owner_id is None:
            missing.append(MissingRequiredField("owner_id"))
        if missing:
            raise CardValidationError(
                missing, ErrorContext(card_id=str(config.id) if config.id else None),
            )

    async def _check_slug_available(self, config: CardConfiguration, slug: str | None) -> None:
        if not slug:
            return
        holder = await self.store.get_card_by_slug(slug)
        if holder is not None and holder["id"] != config.id:
            raise StoreConflict(
                f"Slug '{slug}' is already taken", "save",
                ErrorContext(user_message="That username is already taken."),
            )

    async def save(
        self, config: CardConfiguration, links: Sequence[SocialLinkEntry],
    ) -> LoadedCard:
        """Persist the card and replace its links. Returns the stored state."""
        self.check_can_save(config)
        rows = to_row(config, tuple(links))

        try:
            await self._check_slug_available(config, rows.card_row["slug"])
            if config.id is None:
                card_row = await self.store.insert_card(rows.card_row)
            else:
                existing = await self.store.get_card(CardId(config.id))
                if existing is None or existing["user_id"] != config.owner_id:
                    raise CardNotFound(str(config.id), ErrorContext(card_id=str(config.id)))
                card_row = await self.store.update_card(CardId(config.id), rows.card_row)
                if card_row is None:
                    raise CardNotFound(str(config.id), ErrorContext(card_id=str(config.id)))
            link_rows = await self.store.replace_links(card_row["id"], rows.link_rows)
            await self.store.commit()
        except CardsmithError as e:
            await self.store.rollback()
            logger.error(
                f"Card save failed: {e.message}",
                extra={
                    "card_id": config.id, "owner_id": config.owner_id,
                    "error_code": e.code, "operation": "save",
                },
            )
            raise

        logger.info(
            "Card saved",
            extra={
                "card_id": card_row["id"], "owner_id": config.owner_id,
                "link_count": len(link_rows), "operation": "save",
            },
        )
        return from_row(card_row, link_rows)

    async def delete(self, card_id: CardId, owner_id: OwnerId) -> None:
        """Delete the card and, by cascade, its links."""
        row = await self.store.get_card(card_id)
        if row is None or row["user_id"] != owner_id:
            raise CardNotFound(str(card_id), ErrorContext(card_id=str(card_id)))
        await self.store.delete_card(card_id)
        await self.store.commit()
        logger.info(
            "Card deleted",
            extra={"card_id": card_id, "owner_id": owner_id, "operation": "delete"},
        )


def _as_uuid(reference: str | UUID) -> UUID | None:
    if isinstance(reference, UUID):
        return reference
    try:
        return UUID(str(reference))
    except ValueError:
        return None

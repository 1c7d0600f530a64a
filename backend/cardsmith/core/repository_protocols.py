"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Rows cross the boundary as plain dicts shaped by core/row_mapping.py
    - Implementations raise StoreUnavailable / StoreConflict, never driver exceptions

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: boundary methods are async because implementations do IO,
      but core pure functions never are — the service orchestrates the awaits
"""

from typing import Any, Protocol

from cardsmith.core.domain_types import CardId, OwnerId


class CardStore(Protocol):
    """Contract for business card + social link persistence — implemented by shell."""

    async def get_profile(self, owner_id: OwnerId) -> dict[str, Any] | None: ...

    async def get_card(self, card_id: CardId) -> dict[str, Any] | None: ...
    async def get_card_by_slug(self, slug: str) -> dict[str, Any] | None: ...
    async def list_cards_by_owner(self, owner_id: OwnerId) -> list[dict[str, Any]]: ...

    async def insert_card(self, card_row: dict[str, Any]) -> dict[str, Any]: ...
    async def update_card(
        self, card_id: CardId, card_row: dict[str, Any],
    ) -> dict[str, Any] | None: ...
    async def delete_card(self, card_id: CardId) -> bool: ...

    async def get_links_by_card(self, card_id: CardId) -> list[dict[str, Any]]: ...
    async def replace_links(
        self, card_id: CardId, link_rows: list[dict[str, Any]],
    ) -> list[dict[str, Any]]: ...

    async def commit(self) -> None: ...
    async def rollback(self) -> None: ...

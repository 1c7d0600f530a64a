"""Social Link Collection Manager — ordered, immutable collection of link entries.

Invariants:
    - A collection is a tuple; every operation returns a new tuple
    - add() with a blank url is a no-op (InvalidLinkCandidate, never raised)
    - add() appends with order = max(order) + 1 and local_id = max(local_id) + 1
    - remove() with an out-of-range index is a no-op; survivors keep their order values
    - Position in the tuple is the canonical display order
    - url is free-form: only emptiness is checked, the platform never constrains the domain
"""

from dataclasses import dataclass, replace
from uuid import UUID

from cardsmith.core import registry
from cardsmith.core.errors import InvalidLinkCandidate


@dataclass(frozen=True)
class SocialLinkEntry:
    platform: str
    url: str
    username: str = ""
    order: int = 0
    is_active: bool = True
    local_id: int = 0
    store_id: UUID | None = None

    @property
    def icon(self) -> str:
        return registry.icon_for(self.platform)


@dataclass(frozen=True)
class LinkCandidate:
    """Unsaved input from the add-link form."""
    url: str = ""
    platform: str | None = None
    username: str = ""


LinkCollection = tuple[SocialLinkEntry, ...]

COMPACT_LINK_LIMIT = 4


def check_candidate(candidate: LinkCandidate) -> InvalidLinkCandidate | None:
    """Boundary check for add(). Returns the rejection, or None when acceptable."""
    if not candidate.url or not candidate.url.strip():
        return InvalidLinkCandidate(platform=candidate.platform)
    return None


def _next_order(collection: LinkCollection) -> int:
    return max((e.order for e in collection), default=-1) + 1


def _next_local_id(collection: LinkCollection) -> int:
    return max((e.local_id for e in collection), default=0) + 1


def add(collection: LinkCollection, candidate: LinkCandidate) -> LinkCollection:
    if check_candidate(candidate) is not None:
        return collection
    entry = SocialLinkEntry(
        platform=candidate.platform or registry.default_platform(),
        url=candidate.url,
        username=candidate.username or "",
        order=_next_order(collection),
        local_id=_next_local_id(collection),
    )
    return (*collection, entry)


def remove(collection: LinkCollection, index: int) -> LinkCollection:
    if index < 0 or index >= len(collection):
        return collection
    return collection[:index] + collection[index + 1:]


def move(collection: LinkCollection, from_index: int, to_index: int) -> LinkCollection:
    """Explicit reorder. Order values are rewritten to match the new positions."""
    size = len(collection)
    if not (0 <= from_index < size and 0 <= to_index < size) or from_index == to_index:
        return collection
    items = list(collection)
    entry = items.pop(from_index)
    items.insert(to_index, entry)
    return tuple(replace(e, order=i) for i, e in enumerate(items))


def set_active(collection: LinkCollection, index: int, active: bool) -> LinkCollection:
    if index < 0 or index >= len(collection):
        return collection
    items = list(collection)
    items[index] = replace(items[index], is_active=active)
    return tuple(items)


def dedupe(collection: LinkCollection) -> LinkCollection:
    """Drop later entries repeating an earlier (platform, url) pair."""
    seen: set[tuple[str, str]] = set()
    kept: list[SocialLinkEntry] = []
    for entry in collection:
        key = (entry.platform.strip().lower(), entry.url.strip())
        if key in seen:
            continue
        seen.add(key)
        kept.append(entry)
    return tuple(kept)


def active_links(collection: LinkCollection) -> LinkCollection:
    return tuple(e for e in collection if e.is_active)


def compact_window(collection: LinkCollection) -> tuple[LinkCollection, int]:
    """First COMPACT_LINK_LIMIT entries and the count of the rest."""
    return collection[:COMPACT_LINK_LIMIT], max(0, len(collection) - COMPACT_LINK_LIMIT)

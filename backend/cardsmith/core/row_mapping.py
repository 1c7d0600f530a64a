"""Row Mapping — converts card values to and from record-store row dicts.

Invariants:
    - to_row() then from_row() reproduces every user-set field (store-assigned ids/timestamps aside)
    - Column renames: tagline -> bio, profession -> position, username -> slug, map_link -> map_url
    - An empty username is stored as slug NULL (NULLs never collide under the unique index)
    - Malformed theme/layout values never fail a load: defaults are substituted and a
      MalformedStoredValue notice is returned in LoadedCard.recovered
    - Link rows come back ordered by display_order; position becomes the collection order

Design Decisions:
    - Plain dicts at the boundary so any record store (SQL rows, document stores) can
      feed from_row() without adapters in the core
    - Theme/layout travel as JSON-compatible dicts; a JSON string is also accepted on load
"""

import json
from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from cardsmith.core import registry
from cardsmith.core.card_config import (
    CardConfiguration, Layout, Theme, default_layout, default_theme, normalize_username,
)
from cardsmith.core.domain_types import Alignment, LayoutStyle
from cardsmith.core.errors import MalformedStoredValue
from cardsmith.core.social_links import LinkCollection, SocialLinkEntry


# (model attribute, store column) for plain text columns
_TEXT_COLUMNS: tuple[tuple[str, str], ...] = (
    ("title", "title"),
    ("company", "company"),
    ("tagline", "bio"),
    ("profession", "position"),
    ("avatar_url", "avatar_url"),
    ("phone", "phone"),
    ("whatsapp", "whatsapp"),
    ("email", "email"),
    ("website", "website"),
    ("address", "address"),
    ("map_link", "map_url"),
)


@dataclass(frozen=True)
class CardRows:
    card_row: dict[str, Any]
    link_rows: list[dict[str, Any]]


@dataclass(frozen=True)
class LoadedCard:
    config: CardConfiguration
    links: LinkCollection
    recovered: tuple[MalformedStoredValue, ...] = ()


# ─── Serialization ───────────────────────────────────────────────

def link_to_row(entry: SocialLinkEntry, position: int) -> dict[str, Any]:
    return {
        "platform": entry.platform,
        "username": entry.username or None,
        "url": entry.url,
        "display_order": position,
        "is_active": entry.is_active,
    }


def to_row(config: CardConfiguration, links: Sequence[SocialLinkEntry]) -> CardRows:
    """Card row without card_id in link rows (bound by the store on replace)."""
    card_row: dict[str, Any] = {
        column: (getattr(config, attr) or None) for attr, column in _TEXT_COLUMNS
    }
    card_row.update(
        user_id=config.owner_id,
        slug=normalize_username(config.username) or None,
        theme=config.theme.to_dict(),
        shape=config.shape,
        layout=config.layout.to_dict(),
        is_published=config.is_published,
    )
    if config.id is not None:
        card_row["id"] = config.id
    link_rows = [link_to_row(entry, i) for i, entry in enumerate(links)]
    return CardRows(card_row=card_row, link_rows=link_rows)


# ─── Deserialization ─────────────────────────────────────────────

def _as_mapping(raw: Any) -> Mapping | None:
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError:
            return None
    return raw if isinstance(raw, Mapping) else None


def parse_theme(raw: Any) -> tuple[Theme, MalformedStoredValue | None]:
    """Stored theme -> Theme. NULL means "never set" and is not reported as malformed."""
    if raw is None:
        return default_theme(), None
    data = _as_mapping(raw)
    keys = ("primary", "secondary", "background", "text")
    if data is None or not all(isinstance(data.get(k), str) and data.get(k) for k in keys):
        return default_theme(), MalformedStoredValue("theme", raw)
    name = data.get("name")
    if not isinstance(name, str) or not name:
        # Rows written before presets carried a name
        name = next(
            (p.name for p in registry.list_theme_presets()
             if (p.primary, p.secondary) == (data["primary"], data["secondary"])),
            "Custom",
        )
    return Theme(
        primary=data["primary"], secondary=data["secondary"],
        background=data["background"], text=data["text"], name=name,
    ), None


def parse_layout(raw: Any) -> tuple[Layout, MalformedStoredValue | None]:
    if raw is None:
        return default_layout(), None
    data = _as_mapping(raw)
    if data is None:
        return default_layout(), MalformedStoredValue("layout", raw)
    style = data.get("style", registry.DEFAULT_LAYOUT_STYLE.value)
    alignment = data.get("alignment", registry.DEFAULT_ALIGNMENT.value)
    font = data.get("font", registry.DEFAULT_FONT)
    if (
        style not in {s.value for s in LayoutStyle}
        or alignment not in {a.value for a in Alignment}
        or not isinstance(font, str) or not font
    ):
        return default_layout(), MalformedStoredValue("layout", raw)
    return Layout(style=style, alignment=alignment, font=font), None


def link_from_row(row: Mapping[str, Any], position: int) -> SocialLinkEntry:
    return SocialLinkEntry(
        platform=row.get("platform") or registry.default_platform(),
        url=row.get("url") or "",
        username=row.get("username") or "",
        order=position,
        is_active=row.get("is_active", True) is not False,
        local_id=position + 1,
        store_id=row.get("id"),
    )


def _link_sort_key(indexed: tuple[int, Mapping[str, Any]]) -> tuple:
    index, row = indexed
    order = row.get("display_order")
    return (order if isinstance(order, int) else index, index)


def from_row(
    card_row: Mapping[str, Any], link_rows: Sequence[Mapping[str, Any]] = (),
) -> LoadedCard:
    """Inverse of to_row(). Missing columns take the CardConfiguration defaults."""
    theme, theme_issue = parse_theme(card_row.get("theme"))
    layout, layout_issue = parse_layout(card_row.get("layout"))
    text = {attr: card_row.get(column) or "" for attr, column in _TEXT_COLUMNS}
    config = CardConfiguration(
        owner_id=card_row.get("user_id"),
        username=card_row.get("slug") or "",
        shape=card_row.get("shape") or registry.DEFAULT_SHAPE.value,
        theme=theme,
        layout=layout,
        is_published=bool(card_row.get("is_published", False)),
        id=card_row.get("id"),
        created_at=card_row.get("created_at"),
        updated_at=card_row.get("updated_at"),
        **text,
    )
    ordered = [row for _, row in sorted(enumerate(link_rows), key=_link_sort_key)]
    links = tuple(link_from_row(row, i) for i, row in enumerate(ordered))
    recovered = tuple(issue for issue in (theme_issue, layout_issue) if issue is not None)
    return LoadedCard(config=config, links=links, recovered=recovered)

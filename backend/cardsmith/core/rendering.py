"""Composition Engine — maps a card configuration to a render tree for one of two modes.

Invariants:
    - render() is PURE and deterministic: identical inputs give equal trees, no IO, no state
    - COMPACT (editor preview): configured shape/style honored, first 4 social badges
      plus an overflow counter, status badge and preview info
    - FULL (public page): shape forced to rounded-large, style forced to elevated+bordered,
      every active link rendered as an actionable link, media (6) and reviews (3) capped
      with overflow counters
    - Optional fields that are blank never produce a node
    - Alignment always sets cross-axis and text alignment together

Design Decisions:
    - RenderNode is a generic (kind, props, children) tree so both modes share one
      composition path; callers serialize it with to_dict()
    - Unknown shape/style/alignment strings from old rows resolve to defaults, never errors
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Iterator, Sequence

from cardsmith.core import registry, social_links
from cardsmith.core.card_config import CardConfiguration, is_blank
from cardsmith.core.domain_types import Alignment, CardShape, LayoutStyle, RenderMode
from cardsmith.core.social_links import SocialLinkEntry


MEDIA_LIMIT = 6
REVIEW_LIMIT = 3
STAR_COUNT = 5
TITLE_PLACEHOLDER = "Your Name"
PLACEHOLDER_GLYPH = "camera"

_NON_DIGITS = re.compile(r"\D")


# ─── Render-only inputs ──────────────────────────────────────────

@dataclass(frozen=True)
class MediaItem:
    type: str
    url: str
    title: str = ""
    description: str = ""
    thumbnail_url: str = ""


@dataclass(frozen=True)
class Review:
    reviewer_name: str
    rating: int
    comment: str = ""
    created_at: datetime | None = None


# ─── Tree ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class RenderNode:
    kind: str
    props: dict[str, Any] = field(default_factory=dict)
    children: tuple["RenderNode", ...] = ()

    def walk(self) -> Iterator["RenderNode"]:
        yield self
        for child in self.children:
            yield from child.walk()

    def find(self, kind: str) -> "RenderNode | None":
        return next((n for n in self.walk() if n.kind == kind), None)

    def find_all(self, kind: str) -> list["RenderNode"]:
        return [n for n in self.walk() if n.kind == kind]

    def to_dict(self) -> dict:
        data: dict[str, Any] = {"kind": self.kind, "props": _jsonable(self.props)}
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data


RenderTree = RenderNode


def _jsonable(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (tuple, list)):
        return [_jsonable(v) for v in value]
    if isinstance(value, datetime):
        return value.isoformat()
    return value


# ─── Resolution rules ────────────────────────────────────────────

_SHAPES: dict[str, dict[str, Any]] = {
    CardShape.RECTANGLE.value: {"corner_radius": "none", "aspect_ratio": None},
    CardShape.ROUNDED.value: {"corner_radius": "large", "aspect_ratio": None},
    CardShape.CIRCLE.value: {"corner_radius": "full", "aspect_ratio": "1:1"},
    # Approximated with a large radius, not a true hexagon
    CardShape.HEXAGON.value: {"corner_radius": "large", "aspect_ratio": None},
}

_STYLES: dict[str, dict[str, Any]] = {
    LayoutStyle.CLASSIC.value: {"border": "regular", "elevation": "none", "rotation": False},
    LayoutStyle.MINIMAL.value: {"border": "thin", "elevation": "low", "rotation": False},
    LayoutStyle.CREATIVE.value: {"border": "none", "elevation": "high", "rotation": True},
    LayoutStyle.MODERN.value: {"border": "thin", "elevation": "medium", "rotation": False},
}

_ALIGNMENTS: dict[str, str] = {
    Alignment.LEFT.value: "flex-start",
    Alignment.CENTER.value: "center",
    Alignment.RIGHT.value: "flex-end",
}

_TEXT_ALIGN: dict[str, str] = {
    "flex-start": "left",
    "center": "center",
    "flex-end": "right",
}


def resolve_shape(shape: str, mode: RenderMode) -> dict[str, Any]:
    if mode is RenderMode.FULL:
        return dict(_SHAPES[CardShape.ROUNDED.value])
    return dict(_SHAPES.get(shape, _SHAPES[CardShape.RECTANGLE.value]))


def resolve_style(style: str, mode: RenderMode) -> dict[str, Any]:
    if mode is RenderMode.FULL:
        return dict(_STYLES[LayoutStyle.MODERN.value])
    return dict(_STYLES.get(style, _STYLES[LayoutStyle.MODERN.value]))


def resolve_alignment(alignment: str) -> dict[str, str]:
    align_items = _ALIGNMENTS.get(alignment, "center")
    return {"align_items": align_items, "text_align": _TEXT_ALIGN[align_items]}


def whatsapp_target(number: str) -> str:
    return f"https://wa.me/{_NON_DIGITS.sub('', number)}"


def clamp_rating(rating: int) -> int:
    return max(1, min(STAR_COUNT, int(rating)))


def _overflow(count: int, label: str) -> RenderNode:
    return RenderNode("overflow", {"count": count, "label": label})


# ─── Sections ────────────────────────────────────────────────────

def _avatar(config: CardConfiguration) -> RenderNode:
    theme = config.theme
    if not is_blank(config.avatar_url):
        return RenderNode("avatar", {
            "variant": "image", "src": config.avatar_url,
            "border_color": theme.primary,
        })
    if not is_blank(config.title):
        return RenderNode("avatar", {
            "variant": "initial", "letter": config.title.strip()[0].upper(),
            "background": theme.primary, "border_color": theme.secondary,
        })
    return RenderNode("avatar", {
        "variant": "placeholder", "glyph": PLACEHOLDER_GLYPH,
        "background": theme.primary, "border_color": theme.secondary,
    })


def _identity(config: CardConfiguration, mode: RenderMode) -> RenderNode | None:
    theme = config.theme
    lines: list[RenderNode] = []
    if not is_blank(config.title):
        lines.append(RenderNode("title", {"text": config.title, "color": theme.text}))
    elif mode is RenderMode.COMPACT:
        lines.append(RenderNode("title", {
            "text": TITLE_PLACEHOLDER, "color": theme.text, "placeholder": True,
        }))
    if not is_blank(config.profession):
        lines.append(RenderNode("profession", {"text": config.profession, "color": theme.secondary}))
    if not is_blank(config.company):
        lines.append(RenderNode("company", {"text": config.company, "color": theme.text}))
    if not is_blank(config.tagline):
        lines.append(RenderNode("tagline", {"text": config.tagline, "color": theme.text}))
    if not lines:
        return None
    return RenderNode("identity", children=tuple(lines))


def _contact(channel: str, icon: str, label: str, href: str | None, color: str) -> RenderNode:
    props: dict[str, Any] = {"channel": channel, "icon": icon, "label": label, "icon_color": color}
    if href is not None:
        props["href"] = href
    return RenderNode("contact", props)


def _contacts(config: CardConfiguration, mode: RenderMode) -> RenderNode | None:
    full = mode is RenderMode.FULL
    color = config.theme.primary
    items: list[RenderNode] = []
    if not is_blank(config.email):
        items.append(_contact(
            "email", "mail", config.email,
            f"mailto:{config.email.strip()}" if full else None, color,
        ))
    if not is_blank(config.phone):
        items.append(_contact(
            "phone", "phone", config.phone,
            f"tel:{config.phone.strip()}" if full else None, color,
        ))
    if not is_blank(config.whatsapp):
        items.append(_contact(
            "whatsapp", "message-circle",
            config.whatsapp if full else "WhatsApp",
            whatsapp_target(config.whatsapp) if full else None, color,
        ))
    if not is_blank(config.website):
        items.append(_contact(
            "website", "globe", config.website,
            config.website.strip() if full else None, color,
        ))
    if not is_blank(config.address):
        items.append(_contact("address", "map-pin", config.address, None, color))
    if not is_blank(config.map_link):
        items.append(_contact(
            "map", "map", "View on map",
            config.map_link.strip() if full else None, color,
        ))
    if not items:
        return None
    return RenderNode("contacts", children=tuple(items))


def _social_compact(config: CardConfiguration, links: Sequence[SocialLinkEntry]) -> RenderNode | None:
    if not links:
        return None
    shown, hidden = social_links.compact_window(tuple(links))
    badges = [
        RenderNode("social_badge", {
            "icon": link.icon, "platform": link.platform,
            "background": config.theme.primary,
        })
        for link in shown
    ]
    if hidden:
        badges.append(RenderNode("overflow", {
            "count": hidden, "label": f"+{hidden}",
            "background": config.theme.secondary,
        }))
    return RenderNode("social_links", {"total": len(links)}, tuple(badges))


def _social_full(config: CardConfiguration, links: Sequence[SocialLinkEntry]) -> RenderNode | None:
    if not links:
        return None
    items = []
    for link in links:
        props: dict[str, Any] = {
            "icon": link.icon, "platform": link.platform,
            "href": link.url, "icon_color": config.theme.primary,
        }
        if not is_blank(link.username):
            props["username"] = link.username
        items.append(RenderNode("social_link", props))
    return RenderNode("social_links", {"total": len(links)}, tuple(items))


def _media(media: Sequence[MediaItem]) -> RenderNode | None:
    if not media:
        return None
    items: list[RenderNode] = []
    for item in media[:MEDIA_LIMIT]:
        props: dict[str, Any] = {"type": item.type, "url": item.url, "title": item.title}
        if not is_blank(item.description):
            props["description"] = item.description
        if not is_blank(item.thumbnail_url):
            props["thumbnail_url"] = item.thumbnail_url
        items.append(RenderNode("media_item", props))
    hidden = len(media) - MEDIA_LIMIT
    if hidden > 0:
        items.append(_overflow(hidden, f"+{hidden} more"))
    return RenderNode("media", {"total": len(media)}, tuple(items))


def star_row(rating: int) -> tuple[bool, ...]:
    filled = clamp_rating(rating)
    return tuple(i < filled for i in range(STAR_COUNT))


def _reviews(reviews: Sequence[Review], color: str) -> RenderNode | None:
    if not reviews:
        return None
    items: list[RenderNode] = []
    for review in reviews[:REVIEW_LIMIT]:
        items.append(RenderNode("review", {
            "reviewer_name": review.reviewer_name,
            "rating": clamp_rating(review.rating),
            "stars": star_row(review.rating),
            "star_color": color,
            "comment": review.comment,
            "created_at": review.created_at,
        }))
    hidden = len(reviews) - REVIEW_LIMIT
    if hidden > 0:
        items.append(_overflow(hidden, f"+{hidden} more"))
    return RenderNode("reviews", {"total": len(reviews)}, tuple(items))


def _status_label(config: CardConfiguration) -> str:
    return "Published" if config.is_published else "Draft"


def _preview_info(config: CardConfiguration, link_count: int) -> RenderNode:
    return RenderNode("preview_info", {
        "path": f"/{config.username or 'username'}",
        "theme_name": config.theme.name,
        "profession": "Not set" if is_blank(config.profession) else config.profession,
        "status": _status_label(config),
        "link_count": link_count,
    })


# ─── Entry point ─────────────────────────────────────────────────

def render(
    config: CardConfiguration,
    links: Sequence[SocialLinkEntry],
    media: Sequence[MediaItem] | None = None,
    reviews: Sequence[Review] | None = None,
    mode: RenderMode = RenderMode.COMPACT,
) -> RenderTree:
    """Compose the card tree. media/reviews are ignored in COMPACT mode."""
    mode = RenderMode(mode)
    visible = social_links.active_links(tuple(links))
    font = config.layout.font or registry.DEFAULT_FONT

    card_props: dict[str, Any] = {
        "mode": mode.value,
        "shape": resolve_shape(config.shape, mode),
        "style": resolve_style(config.layout.style, mode),
        "alignment": resolve_alignment(config.layout.alignment),
        "background": config.theme.background,
        "text_color": config.theme.text,
        "font_family": f"'{font}', sans-serif",
        "font_query": font.replace(" ", "+"),
    }

    if mode is RenderMode.COMPACT:
        sections = [
            _avatar(config),
            _identity(config, mode),
            _contacts(config, mode),
            _social_compact(config, visible),
        ]
    else:
        sections = [
            _avatar(config),
            _identity(config, mode),
            _contacts(config, mode),
            _social_full(config, visible),
            _media(tuple(media or ())),
            _reviews(tuple(reviews or ()), config.theme.primary),
        ]
    card = RenderNode("card", card_props, tuple(s for s in sections if s is not None))

    if mode is RenderMode.FULL:
        return card
    return RenderNode("preview", {"mode": mode.value}, (
        RenderNode("status_badge", {
            "label": _status_label(config), "published": config.is_published,
        }),
        card,
        _preview_info(config, len(visible)),
    ))

"""Card Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - CardIn carries the whole editor state (card fields + ordered links) for save/preview
    - Enumerated options (shape, style, alignment, mode) validated with Literal types
    - Links with a blank url are dropped on conversion, matching the add-link rule
    - Conversion helpers produce core values; core never sees a schema object

Design Decisions:
    - Literal types over str enums: Pydantic handles validation natively
    - field_validator for side-effect-free transforms (strip)
"""

from dataclasses import replace
from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from cardsmith.core import card_config, social_links
from cardsmith.core.card_config import CardConfiguration, Theme
from cardsmith.core.rendering import MediaItem, Review
from cardsmith.core.row_mapping import LoadedCard
from cardsmith.core.social_links import LinkCandidate, LinkCollection


class ThemeIn(BaseModel):
    primary: str = Field(min_length=1, max_length=32)
    secondary: str = Field(min_length=1, max_length=32)
    background: str = Field(min_length=1, max_length=32)
    text: str = Field(min_length=1, max_length=32)
    name: str = Field("Custom", min_length=1, max_length=64)


class LayoutIn(BaseModel):
    style: Literal["modern", "classic", "minimal", "creative"] = "modern"
    alignment: Literal["left", "center", "right"] = "center"
    font: str = Field("Inter", min_length=1, max_length=64)


class SocialLinkIn(BaseModel):
    platform: str | None = Field(None, max_length=50)
    username: str = Field("", max_length=200)
    url: str = Field("", max_length=2048)
    is_active: bool = True


class CardIn(BaseModel):
    """Editor state submitted for save or preview."""
    id: UUID | None = None

    title: str = Field("", max_length=200)
    username: str = Field("", max_length=64)
    company: str = Field("", max_length=200)
    tagline: str = Field("", max_length=500)
    profession: str = Field("", max_length=200)
    avatar_url: str = Field("", max_length=2048)

    phone: str = Field("", max_length=50)
    whatsapp: str = Field("", max_length=50)
    email: str = Field("", max_length=320)
    website: str = Field("", max_length=2048)
    address: str = Field("", max_length=500)
    map_link: str = Field("", max_length=2048)

    shape: Literal["rectangle", "rounded", "circle", "hexagon"] = "rectangle"
    theme: ThemeIn | None = None
    layout: LayoutIn = LayoutIn()
    is_published: bool = False

    links: list[SocialLinkIn] = Field(default_factory=list, max_length=50)

    @field_validator("title", "company", "profession", "email", "phone", "whatsapp")
    @classmethod
    def strip_text(cls, v: str) -> str:
        return v.strip()

    def to_config(self, owner_id: UUID | None) -> CardConfiguration:
        base = card_config.create(owner_id)
        patch = self.model_dump(
            exclude={"id", "theme", "layout", "links"},
        )
        patch["layout"] = self.layout.model_dump()
        if self.theme is not None:
            patch["theme"] = Theme(**self.theme.model_dump())
        config = card_config.update(base, patch)
        if self.id is not None:
            config = replace(config, id=self.id)
        return config

    def to_links(self) -> LinkCollection:
        collection: LinkCollection = ()
        for item in self.links:
            grown = social_links.add(collection, LinkCandidate(
                url=item.url, platform=item.platform, username=item.username,
            ))
            if grown is not collection and not item.is_active:
                grown = social_links.set_active(grown, len(grown) - 1, False)
            collection = grown
        return collection


class MediaItemIn(BaseModel):
    type: Literal["image", "video", "document"]
    url: str = Field(min_length=1, max_length=2048)
    title: str = Field("", max_length=200)
    description: str = Field("", max_length=1000)
    thumbnail_url: str = Field("", max_length=2048)

    def to_core(self) -> MediaItem:
        return MediaItem(**self.model_dump())


class ReviewIn(BaseModel):
    reviewer_name: str = Field(min_length=1, max_length=200)
    rating: int
    comment: str = Field("", max_length=2000)
    created_at: datetime | None = None

    def to_core(self) -> Review:
        return Review(**self.model_dump())


class PreviewRequest(BaseModel):
    """Render request for the live editor preview (or a full-page dry run)."""
    card: CardIn
    mode: Literal["compact", "full"] = "compact"
    media: list[MediaItemIn] = Field(default_factory=list)
    reviews: list[ReviewIn] = Field(default_factory=list)


# ─── Responses ───────────────────────────────────────────────────

class SocialLinkOut(BaseModel):
    id: UUID | None = None
    platform: str
    username: str = ""
    url: str
    display_order: int
    is_active: bool
    icon: str


class CardOut(BaseModel):
    id: UUID | None
    owner_id: UUID | None
    title: str
    username: str
    company: str
    tagline: str
    profession: str
    avatar_url: str
    phone: str
    whatsapp: str
    email: str
    website: str
    address: str
    map_link: str
    shape: str
    theme: dict[str, str]
    layout: dict[str, str]
    is_published: bool
    created_at: datetime | None = None
    updated_at: datetime | None = None
    links: list[SocialLinkOut] = []
    share_path: str | None = None
    share_url: str | None = None
    can_save: bool = True
    warnings: list[str] = []

    @classmethod
    def from_loaded(
        cls, loaded: LoadedCard, require_slug: bool = True, base_url: str = "",
    ) -> "CardOut":
        config = loaded.config
        fields = card_config.user_fields(config)
        fields.pop("owner_id")
        share_path = None
        if config.is_published and config.id is not None:
            share_path = f"/{config.username}" if config.username else f"/c/{config.id}"
        return cls(
            id=config.id,
            owner_id=config.owner_id,
            created_at=config.created_at,
            updated_at=config.updated_at,
            links=[
                SocialLinkOut(
                    id=link.store_id, platform=link.platform, username=link.username,
                    url=link.url, display_order=link.order, is_active=link.is_active,
                    icon=link.icon,
                )
                for link in loaded.links
            ],
            share_path=share_path,
            share_url=f"{base_url.rstrip('/')}{share_path}" if share_path and base_url else None,
            can_save=card_config.validate_for_save(config, require_slug).can_save,
            warnings=[issue.message for issue in loaded.recovered],
            **fields,
        )

"""Card Configuration Model — canonical immutable value for one card's content and presentation.

Invariants:
    - CardConfiguration, Theme and Layout are frozen; every mutation returns a new value
    - username is always stored normalized: lowercase, only [a-z0-9-]
    - shape / layout.style / layout.alignment written through update() are members of
      their registry enumerations (loaded rows may carry other strings; rendering falls back)
    - Store-assigned fields (id, created_at, updated_at) are never touched by update()
    - Theme entries and the layout font are never empty, so every stored value reloads as written
    - validate_for_save() reports, it never raises

Design Decisions:
    - Reducer-style update(config, patch) instead of mutable form state
    - theme/layout patches merge key-wise so a single color or font can be changed
"""

import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from datetime import datetime
from typing import Any
from uuid import UUID

from cardsmith.core import registry
from cardsmith.core.domain_types import Alignment, CardShape, LayoutStyle, RequiredField
from cardsmith.core.errors import MissingRequiredField


_SLUG_STRIP = re.compile(r"[^a-z0-9-]")


@dataclass(frozen=True)
class Theme:
    primary: str
    secondary: str
    background: str
    text: str
    name: str

    @classmethod
    def from_preset(cls, preset: registry.ThemePreset) -> "Theme":
        return cls(
            primary=preset.primary, secondary=preset.secondary,
            background=preset.background, text=preset.text, name=preset.name,
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "primary": self.primary, "secondary": self.secondary,
            "background": self.background, "text": self.text, "name": self.name,
        }


@dataclass(frozen=True)
class Layout:
    style: str = registry.DEFAULT_LAYOUT_STYLE.value
    alignment: str = registry.DEFAULT_ALIGNMENT.value
    font: str = registry.DEFAULT_FONT

    def to_dict(self) -> dict[str, str]:
        return {"style": self.style, "alignment": self.alignment, "font": self.font}


def default_theme() -> Theme:
    return Theme.from_preset(registry.list_theme_presets()[0])


def default_layout() -> Layout:
    return Layout()


@dataclass(frozen=True)
class CardConfiguration:
    """One card. Empty strings mean "not set" for every optional text field."""

    owner_id: UUID | None = None

    # Identity
    title: str = ""
    username: str = ""
    company: str = ""
    tagline: str = ""
    profession: str = ""
    avatar_url: str = ""

    # Contact
    phone: str = ""
    whatsapp: str = ""
    email: str = ""
    website: str = ""
    address: str = ""
    map_link: str = ""

    # Presentation
    shape: str = registry.DEFAULT_SHAPE.value
    theme: Theme = field(default_factory=default_theme)
    layout: Layout = field(default_factory=default_layout)

    # Publication
    is_published: bool = False

    # Store-assigned
    id: UUID | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


STORE_ASSIGNED_FIELDS: frozenset[str] = frozenset({"id", "created_at", "updated_at"})
TEXT_FIELDS: tuple[str, ...] = (
    "title", "username", "company", "tagline", "profession", "avatar_url",
    "phone", "whatsapp", "email", "website", "address", "map_link",
)
OPTIONAL_DISPLAY_FIELDS: tuple[str, ...] = (
    "company", "tagline", "profession",
    "email", "phone", "whatsapp", "website", "address", "map_link",
)
_PATCHABLE: frozenset[str] = frozenset(
    f.name for f in fields(CardConfiguration)
) - STORE_ASSIGNED_FIELDS - {"owner_id"}


@dataclass(frozen=True)
class ValidationResult:
    missing: tuple[MissingRequiredField, ...] = ()

    @property
    def can_save(self) -> bool:
        return not self.missing

    @property
    def missing_fields(self) -> list[str]:
        return [m.field for m in self.missing]


def normalize_username(raw: str | None) -> str:
    """Lowercase and strip everything outside [a-z0-9-]. "Jane_Doe!!" -> "janedoe"."""
    if not raw:
        return ""
    return _SLUG_STRIP.sub("", raw.lower())


def is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def create(owner_id: UUID | None, email: str = "", title: str = "") -> CardConfiguration:
    """Fresh unpublished card with registry defaults.

    email/title seed the form from the signed-in profile, as the editor does
    when a new card is started.
    """
    return CardConfiguration(owner_id=owner_id, email=email or "", title=title or "")


def _enum_value(value: Any, enum_cls: type, field_name: str) -> str:
    raw = value.value if isinstance(value, enum_cls) else value
    allowed = {m.value for m in enum_cls}
    if raw not in allowed:
        raise ValueError(
            f"Invalid {field_name} '{raw}'. Expected one of: {', '.join(sorted(allowed))}",
        )
    return raw


def _require_values(values: Mapping[str, Any], what: str) -> None:
    # Stored theme/layout values with an empty entry are unreadable on load
    empty = sorted(k for k, v in values.items() if v is None or str(v) == "")
    if empty:
        raise ValueError(f"{what} values must not be empty: {', '.join(empty)}")


def _merge_theme(current: Theme, patch: Any) -> Theme:
    if isinstance(patch, Theme):
        _require_values(patch.to_dict(), "theme")
        return patch
    if isinstance(patch, registry.ThemePreset):
        return Theme.from_preset(patch)
    if not isinstance(patch, Mapping):
        raise ValueError("theme patch must be a mapping")
    unknown = set(patch) - set(current.to_dict())
    if unknown:
        raise ValueError(f"Unknown theme keys: {', '.join(sorted(unknown))}")
    _require_values(patch, "theme")
    return replace(current, **{k: str(v) for k, v in patch.items()})


def _merge_layout(current: Layout, patch: Any) -> Layout:
    if isinstance(patch, Layout):
        values = patch.to_dict()
    elif isinstance(patch, Mapping):
        unknown = set(patch) - set(current.to_dict())
        if unknown:
            raise ValueError(f"Unknown layout keys: {', '.join(sorted(unknown))}")
        values = {**current.to_dict(), **patch}
    else:
        raise ValueError("layout patch must be a mapping")
    _require_values(values, "layout")
    return Layout(
        style=_enum_value(values["style"], LayoutStyle, "layout style"),
        alignment=_enum_value(values["alignment"], Alignment, "alignment"),
        font=str(values["font"]),
    )


def update(config: CardConfiguration, patch: Mapping[str, Any]) -> CardConfiguration:
    """Apply a partial field update and return the new configuration.

    Raises ValueError for unknown keys or values outside the registry
    enumerations; the input configuration is never modified.
    """
    unknown = set(patch) - _PATCHABLE
    if unknown:
        raise ValueError(f"Unknown or read-only card fields: {', '.join(sorted(unknown))}")

    changes: dict[str, Any] = {}
    for key, value in patch.items():
        if key == "theme":
            changes[key] = _merge_theme(config.theme, value)
        elif key == "layout":
            changes[key] = _merge_layout(config.layout, value)
        elif key == "shape":
            changes[key] = _enum_value(value, CardShape, "shape")
        elif key == "is_published":
            changes[key] = bool(value)
        elif key == "username":
            changes[key] = normalize_username(value)
        else:
            changes[key] = "" if value is None else str(value)
    return replace(config, **changes)


def apply_theme_preset(config: CardConfiguration, name: str) -> CardConfiguration:
    """Swap the whole theme for a registry preset. Unknown names leave the card unchanged."""
    preset = registry.get_theme_preset(name)
    if preset is None:
        return config
    return replace(config, theme=Theme.from_preset(preset))


def validate_for_save(config: CardConfiguration, require_slug: bool = False) -> ValidationResult:
    """Report blank required fields. The caller disables saving while any are missing."""
    missing: list[MissingRequiredField] = []
    if is_blank(config.title):
        missing.append(MissingRequiredField(RequiredField.TITLE.value))
    if require_slug and is_blank(config.username):
        missing.append(MissingRequiredField(RequiredField.USERNAME.value))
    return ValidationResult(tuple(missing))


def is_preview_equivalent(a: CardConfiguration, b: CardConfiguration) -> bool:
    """True when no user-visible field differs (store-assigned fields ignored)."""
    return all(
        getattr(a, f.name) == getattr(b, f.name)
        for f in fields(CardConfiguration)
        if f.name not in STORE_ASSIGNED_FIELDS
    )


def user_fields(config: CardConfiguration) -> dict[str, Any]:
    """Every user-set field as plain data, for idempotence and round-trip comparisons."""
    data: dict[str, Any] = {name: getattr(config, name) for name in TEXT_FIELDS}
    data.update(
        owner_id=config.owner_id,
        shape=config.shape,
        theme=config.theme.to_dict(),
        layout=config.layout.to_dict(),
        is_published=config.is_published,
    )
    return data

"""Theme & Layout Registry — fixed catalog of selectable presentation options.

Invariants:
    - Every list_* function returns the same ordered tuple on every call
    - Theme preset names are unique; the first preset is the default theme
    - The first social platform is the default platform for new links
    - icon_for() never fails: unknown platform names resolve to "link"

Design Decisions:
    - Icon binding is a static name -> tag table, not dispatch on a platform type
    - Lookup is case- and whitespace-insensitive so stored names like
      "You Tube" and "youtube" bind to the same icon
"""

from dataclasses import dataclass

from cardsmith.core.domain_types import Alignment, CardShape, LayoutStyle


@dataclass(frozen=True)
class ThemePreset:
    name: str
    primary: str
    secondary: str
    background: str
    text: str


@dataclass(frozen=True)
class SocialPlatform:
    name: str
    placeholder_hint: str


THEME_PRESETS: tuple[ThemePreset, ...] = (
    ThemePreset("Ocean Blue", "#3B82F6", "#1E40AF", "#FFFFFF", "#1F2937"),
    ThemePreset("Forest Green", "#10B981", "#047857", "#FFFFFF", "#1F2937"),
    ThemePreset("Sunset Orange", "#F59E0B", "#D97706", "#FFFFFF", "#1F2937"),
    ThemePreset("Royal Purple", "#8B5CF6", "#7C3AED", "#FFFFFF", "#1F2937"),
    ThemePreset("Rose Pink", "#EC4899", "#DB2777", "#FFFFFF", "#1F2937"),
    ThemePreset("Dark Mode", "#60A5FA", "#3B82F6", "#1F2937", "#F9FAFB"),
)

FONTS: tuple[str, ...] = (
    "Inter", "Roboto", "Open Sans", "Lato", "Montserrat", "Poppins",
)

PROFESSION_CATEGORIES: tuple[str, ...] = (
    "Business & Consulting",
    "Creative & Design",
    "Education & Training",
    "Finance & Legal",
    "Food & Hospitality",
    "Health & Wellness",
    "Marketing & Sales",
    "Real Estate",
    "Retail & E-commerce",
    "Technology & IT",
    "Trades & Services",
    "Other",
)

CUSTOM_LINK_PLATFORM = "Custom Link"

SOCIAL_PLATFORMS: tuple[SocialPlatform, ...] = (
    SocialPlatform("Instagram", "https://instagram.com/username"),
    SocialPlatform("LinkedIn", "https://linkedin.com/in/username"),
    SocialPlatform("GitHub", "https://github.com/username"),
    SocialPlatform("Twitter", "https://twitter.com/username"),
    SocialPlatform("Facebook", "https://facebook.com/username"),
    SocialPlatform("YouTube", "https://youtube.com/@channel"),
    SocialPlatform("TikTok", "https://tiktok.com/@username"),
    SocialPlatform("Telegram", "https://t.me/username"),
    SocialPlatform("Website", "https://example.com"),
    SocialPlatform(CUSTOM_LINK_PLATFORM, "https://"),
)

FALLBACK_ICON = "link"

# Keys are normalized with _icon_key()
_ICONS: dict[str, str] = {
    "instagram": "instagram",
    "linkedin": "linkedin",
    "github": "github",
    "twitter": "twitter",
    "x": "twitter",
    "facebook": "facebook",
    "youtube": "youtube",
    "tiktok": "tiktok",
    "telegram": "telegram",
    "website": "globe",
    "web": "globe",
    "customlink": FALLBACK_ICON,
}

DEFAULT_SHAPE = CardShape.RECTANGLE
DEFAULT_LAYOUT_STYLE = LayoutStyle.MODERN
DEFAULT_ALIGNMENT = Alignment.CENTER
DEFAULT_FONT = FONTS[0]


def list_theme_presets() -> tuple[ThemePreset, ...]:
    return THEME_PRESETS


def list_layout_styles() -> tuple[str, ...]:
    return tuple(s.value for s in LayoutStyle)


def list_alignments() -> tuple[str, ...]:
    return tuple(a.value for a in Alignment)


def list_shapes() -> tuple[str, ...]:
    return tuple(s.value for s in CardShape)


def list_fonts() -> tuple[str, ...]:
    return FONTS


def list_profession_categories() -> tuple[str, ...]:
    return PROFESSION_CATEGORIES


def list_social_platforms() -> tuple[SocialPlatform, ...]:
    return SOCIAL_PLATFORMS


def default_platform() -> str:
    return SOCIAL_PLATFORMS[0].name


def get_theme_preset(name: str | None) -> ThemePreset | None:
    """Find a preset by exact name."""
    for preset in THEME_PRESETS:
        if preset.name == name:
            return preset
    return None


def _icon_key(platform: str) -> str:
    return "".join(platform.split()).lower()


def icon_for(platform: str | None) -> str:
    """Icon tag for a platform name. Unknown or empty names get the generic link icon."""
    if not platform:
        return FALLBACK_ICON
    return _ICONS.get(_icon_key(platform), FALLBACK_ICON)


def placeholder_for(platform: str | None) -> str:
    """URL placeholder hint shown in the add-link form."""
    if platform:
        key = _icon_key(platform)
        for entry in SOCIAL_PLATFORMS:
            if _icon_key(entry.name) == key:
                return entry.placeholder_hint
    return SOCIAL_PLATFORMS[-1].placeholder_hint


def catalog() -> dict:
    """Whole registry as JSON-safe data (for the editor's option pickers)."""
    return {
        "theme_presets": [
            {
                "name": p.name, "primary": p.primary, "secondary": p.secondary,
                "background": p.background, "text": p.text,
            }
            for p in THEME_PRESETS
        ],
        "layout_styles": list(list_layout_styles()),
        "alignments": list(list_alignments()),
        "shapes": list(list_shapes()),
        "fonts": list(FONTS),
        "profession_categories": list(PROFESSION_CATEGORIES),
        "social_platforms": [
            {
                "name": p.name,
                "placeholder_hint": p.placeholder_hint,
                "icon": icon_for(p.name),
            }
            for p in SOCIAL_PLATFORMS
        ],
    }

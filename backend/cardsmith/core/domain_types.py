"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - CardId, OwnerId wrap UUIDs; LinkId wraps the store UUID of a link row
    - All closed option sets are str Enums — no raw string matching in core logic
    - Stored values that fall outside an enum are kept as plain strings and
      resolved to a fallback by the rendering engine

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

CardId = NewType("CardId", UUID)
OwnerId = NewType("OwnerId", UUID)
LinkId = NewType("LinkId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class CardShape(str, Enum):
    """Outer container shape selected in the design panel."""
    RECTANGLE = "rectangle"
    ROUNDED = "rounded"
    CIRCLE = "circle"
    HEXAGON = "hexagon"


class LayoutStyle(str, Enum):
    """Card decoration style."""
    MODERN = "modern"
    CLASSIC = "classic"
    MINIMAL = "minimal"
    CREATIVE = "creative"


class Alignment(str, Enum):
    """Content alignment; drives cross-axis and text alignment together."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


class RenderMode(str, Enum):
    """Compact = owner-facing live preview, FULL = public page."""
    COMPACT = "compact"
    FULL = "full"


class MediaType(str, Enum):
    """Media gallery item kinds (public page only)."""
    IMAGE = "image"
    VIDEO = "video"
    DOCUMENT = "document"


class RequiredField(str, Enum):
    """Fields that gate the save action."""
    TITLE = "title"
    USERNAME = "username"

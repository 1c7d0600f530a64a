"""Editor State — immutable card editor state and its reducer.

Invariants:
    - reduce() is PURE: returns a new EditorState, never mutates the input
    - The draft link resets to the default platform only after a successful commit
    - A rejected commit (blank url) leaves links and draft untouched
    - Reset keeps the owner and the seeded email/title, drops everything else

Design Decisions:
    - One action dataclass per user gesture, dispatched on type in reduce()
    - needs_preview_refresh() compares values, so re-applying the same edit does
      not trigger a re-render
"""

from dataclasses import dataclass, field, replace
from typing import Any, Union

from cardsmith.core import card_config, social_links
from cardsmith.core.card_config import CardConfiguration
from cardsmith.core.social_links import LinkCandidate, LinkCollection


@dataclass(frozen=True)
class EditorState:
    config: CardConfiguration
    links: LinkCollection = ()
    draft_link: LinkCandidate = field(default_factory=LinkCandidate)

    def can_save(self, require_slug: bool = False) -> bool:
        return card_config.validate_for_save(self.config, require_slug).can_save

    @property
    def can_add_link(self) -> bool:
        return social_links.check_candidate(self.draft_link) is None


# ─── Actions ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class EditFields:
    patch: dict[str, Any]


@dataclass(frozen=True)
class SelectThemePreset:
    name: str


@dataclass(frozen=True)
class EditDraftLink:
    platform: str | None = None
    username: str | None = None
    url: str | None = None


@dataclass(frozen=True)
class CommitDraftLink:
    pass


@dataclass(frozen=True)
class RemoveLink:
    index: int


@dataclass(frozen=True)
class MoveLink:
    from_index: int
    to_index: int


@dataclass(frozen=True)
class Reset:
    email: str = ""
    title: str = ""


EditorAction = Union[
    EditFields, SelectThemePreset, EditDraftLink, CommitDraftLink,
    RemoveLink, MoveLink, Reset,
]


def start(config: CardConfiguration, links: LinkCollection = ()) -> EditorState:
    return EditorState(config=config, links=tuple(links))


def _commit_draft(state: EditorState) -> EditorState:
    links = social_links.add(state.links, state.draft_link)
    if links is state.links:
        return state
    return replace(state, links=links, draft_link=LinkCandidate())


def reduce(state: EditorState, action: EditorAction) -> EditorState:
    """Apply one editor action. Unknown action types raise TypeError."""
    if isinstance(action, EditFields):
        return replace(state, config=card_config.update(state.config, action.patch))
    if isinstance(action, SelectThemePreset):
        return replace(
            state, config=card_config.apply_theme_preset(state.config, action.name),
        )
    if isinstance(action, EditDraftLink):
        draft = state.draft_link
        return replace(state, draft_link=LinkCandidate(
            url=draft.url if action.url is None else action.url,
            platform=draft.platform if action.platform is None else action.platform,
            username=draft.username if action.username is None else action.username,
        ))
    if isinstance(action, CommitDraftLink):
        return _commit_draft(state)
    if isinstance(action, RemoveLink):
        return replace(state, links=social_links.remove(state.links, action.index))
    if isinstance(action, MoveLink):
        return replace(
            state,
            links=social_links.move(state.links, action.from_index, action.to_index),
        )
    if isinstance(action, Reset):
        fresh = card_config.create(state.config.owner_id, action.email, action.title)
        return EditorState(config=fresh)
    raise TypeError(f"Unknown editor action: {type(action).__name__}")


def needs_preview_refresh(before: EditorState, after: EditorState) -> bool:
    """Preview re-renders only when the card or its links changed by value."""
    return (
        not card_config.is_preview_equivalent(before.config, after.config)
        or before.links != after.links
    )

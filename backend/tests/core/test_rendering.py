"""Composition Engine — tests for compact and full render trees.

Tests cover:
    - Avatar variants: image, initial letter, placeholder glyph
    - Shape honored in COMPACT, forced to rounded in FULL
    - Style and alignment resolution
    - WhatsApp deep link carries digits only
    - Each optional display field shown when set, omitted when blank
    - Preview info counts only active links
    - Compact social window (4 + overflow) vs full link list
    - Media/review caps and star clamping
    - Determinism and JSON-safe serialization
"""

import json
from dataclasses import replace
from uuid import uuid4

import pytest

from cardsmith.core import card_config, rendering, social_links
from cardsmith.core.domain_types import RenderMode
from cardsmith.core.rendering import MediaItem, Review, render
from cardsmith.core.social_links import LinkCandidate


@pytest.fixture
def jane():
    config = card_config.create(uuid4())
    return card_config.update(config, {"title": "Jane Doe", "username": "jane"})


def _links(count, platform="GitHub"):
    links = ()
    for i in range(count):
        links = social_links.add(links, LinkCandidate(url=f"https://site/{i}", platform=platform))
    return links


def _card(tree):
    return tree if tree.kind == "card" else tree.find("card")


# ─── Avatar ──────────────────────────────────────────────────────

def test_initial_badge_uses_first_letter_of_title(jane):
    avatar = render(jane, ()).find("avatar")
    assert avatar.props["variant"] == "initial"
    assert avatar.props["letter"] == "J"
    assert avatar.props["background"] == jane.theme.primary


def test_lowercase_title_initial_is_uppercased(jane):
    avatar = render(replace(jane, title="jane"), ()).find("avatar")
    assert avatar.props["letter"] == "J"


def test_avatar_image_preferred(jane):
    config = replace(jane, avatar_url="https://img/jane.png")
    avatar = render(config, ()).find("avatar")
    assert avatar.props == {
        "variant": "image", "src": "https://img/jane.png",
        "border_color": jane.theme.primary,
    }


def test_placeholder_avatar_and_title_when_blank():
    tree = render(card_config.create(None), ())
    assert tree.find("avatar").props["variant"] == "placeholder"
    title = tree.find("title")
    assert title.props["text"] == "Your Name"
    assert title.props["placeholder"] is True


def test_full_mode_has_no_placeholder_title():
    tree = render(card_config.create(None), (), mode=RenderMode.FULL)
    assert tree.find("title") is None


# ─── Shape / style / alignment ───────────────────────────────────

def test_circle_shape_compact_vs_full(jane):
    circle = replace(jane, shape="circle")
    compact = _card(render(circle, ()))
    assert compact.props["shape"] == {"corner_radius": "full", "aspect_ratio": "1:1"}
    full = render(circle, (), mode=RenderMode.FULL)
    assert full.props["shape"]["corner_radius"] == "large"
    assert full.props["shape"]["aspect_ratio"] is None


def test_unknown_shape_falls_back_to_rectangle(jane):
    card = _card(render(replace(jane, shape="star"), ()))
    assert card.props["shape"]["corner_radius"] == "none"


@pytest.mark.parametrize("style,border,elevation", [
    ("classic", "regular", "none"),
    ("minimal", "thin", "low"),
    ("creative", "none", "high"),
    ("modern", "thin", "medium"),
])
def test_style_resolution_compact(jane, style, border, elevation):
    config = card_config.update(jane, {"layout": {"style": style}})
    props = _card(render(config, ())).props["style"]
    assert (props["border"], props["elevation"]) == (border, elevation)


def test_creative_style_rotates_in_compact_only(jane):
    config = card_config.update(jane, {"layout": {"style": "creative"}})
    assert _card(render(config, ())).props["style"]["rotation"] is True
    assert render(config, (), mode="full").props["style"]["rotation"] is False


@pytest.mark.parametrize("alignment,align_items,text_align", [
    ("left", "flex-start", "left"),
    ("center", "center", "center"),
    ("right", "flex-end", "right"),
])
def test_alignment_sets_both_axes(jane, alignment, align_items, text_align):
    config = card_config.update(jane, {"layout": {"alignment": alignment}})
    assert _card(render(config, ())).props["alignment"] == {
        "align_items": align_items, "text_align": text_align,
    }


def test_font_family_and_query(jane):
    config = card_config.update(jane, {"layout": {"font": "Open Sans"}})
    props = _card(render(config, ())).props
    assert props["font_family"] == "'Open Sans', sans-serif"
    assert props["font_query"] == "Open+Sans"


# ─── Contacts ────────────────────────────────────────────────────

def test_whatsapp_link_strips_non_digits(jane):
    config = replace(jane, whatsapp="+1 (555) 123-4567")
    tree = render(config, (), mode=RenderMode.FULL)
    whatsapp = next(n for n in tree.find_all("contact") if n.props["channel"] == "whatsapp")
    assert whatsapp.props["href"] == "https://wa.me/15551234567"


def test_compact_contacts_are_not_actionable(jane):
    config = replace(jane, email="jane@example.com", whatsapp="+1 555")
    contacts = render(config, ()).find_all("contact")
    assert all("href" not in c.props for c in contacts)
    assert contacts[-1].props["label"] == "WhatsApp"


def test_full_contacts_are_actionable(jane):
    config = replace(jane, email="jane@example.com", phone="+1 555", map_link="https://maps/x")
    hrefs = {
        c.props["channel"]: c.props.get("href")
        for c in render(config, (), mode="full").find_all("contact")
    }
    assert hrefs == {
        "email": "mailto:jane@example.com",
        "phone": "tel:+1 555",
        "map": "https://maps/x",
    }


def test_blank_optional_fields_render_nothing(jane):
    tree = render(jane, (), mode=RenderMode.FULL)
    kinds = {n.kind for n in tree.walk()}
    assert "contacts" not in kinds
    assert "company" not in kinds
    assert "tagline" not in kinds
    assert "profession" not in kinds
    assert "social_links" not in kinds


def test_identity_lines(jane):
    config = replace(jane, profession="Engineer", company="Acme", tagline="Hi")
    identity = render(config, ()).find("identity")
    assert [c.kind for c in identity.children] == ["title", "profession", "company", "tagline"]


# ─── Social links ────────────────────────────────────────────────

def test_compact_shows_four_badges_and_overflow(jane):
    social = render(jane, _links(6)).find("social_links")
    badges = [c for c in social.children if c.kind == "social_badge"]
    assert len(badges) == 4
    overflow = social.find("overflow")
    assert overflow.props["count"] == 2
    assert overflow.props["label"] == "+2"


def test_full_renders_every_link(jane):
    social = render(jane, _links(6), mode=RenderMode.FULL).find("social_links")
    assert len(social.find_all("social_link")) == 6
    assert social.find("overflow") is None
    assert social.children[0].props["href"] == "https://site/0"


def test_inactive_links_not_rendered(jane):
    links = social_links.set_active(_links(2), 0, False)
    full = render(jane, links, mode="full").find_all("social_link")
    assert [n.props["href"] for n in full] == ["https://site/1"]


def test_unknown_platform_gets_generic_icon(jane):
    tree = render(jane, _links(1, platform="Mastodon"))
    assert tree.find("social_badge").props["icon"] == "link"


# ─── Media / reviews ─────────────────────────────────────────────

def test_media_capped_at_six(jane):
    media = [MediaItem("image", f"https://m/{i}") for i in range(8)]
    section = render(jane, (), media=media, mode="full").find("media")
    assert len(section.find_all("media_item")) == 6
    assert section.find("overflow").props["label"] == "+2 more"


def test_reviews_capped_and_clamped(jane):
    reviews = [Review("A", 9), Review("B", 0), Review("C", 3), Review("D", 4)]
    section = render(jane, (), reviews=reviews, mode="full").find("reviews")
    items = section.find_all("review")
    assert [r.props["rating"] for r in items] == [5, 1, 3]
    assert items[2].props["stars"] == (True, True, True, False, False)
    assert section.find("overflow").props["count"] == 1


def test_compact_ignores_media(jane):
    tree = render(jane, (), media=[MediaItem("image", "https://m")])
    assert tree.find("media") is None


# ─── Preview wrapper ─────────────────────────────────────────────

def test_compact_preview_status_and_info(jane):
    tree = render(jane, _links(2))
    assert tree.kind == "preview"
    assert tree.find("status_badge").props["label"] == "Draft"
    info = tree.find("preview_info").props
    assert info["path"] == "/jane"
    assert info["profession"] == "Not set"
    assert info["link_count"] == 2


def test_published_status(jane):
    tree = render(replace(jane, is_published=True), ())
    assert tree.find("status_badge").props["label"] == "Published"


def test_render_is_deterministic_and_json_safe(jane):
    links = _links(5)
    reviews = [Review("A", 4)]
    first = render(jane, links, reviews=reviews, mode="full")
    assert first == render(jane, links, reviews=reviews, mode="full")
    json.dumps(first.to_dict())
    json.dumps(render(jane, links).to_dict())


def test_whatsapp_target_helper():
    assert rendering.whatsapp_target("+55 11 9999-0000") == "https://wa.me/551199990000"


# ─── Compact field visibility ────────────────────────────────────

_FIELD_VALUES = {
    "company": "Acme",
    "tagline": "Builds things",
    "profession": "Engineer",
    "email": "jane@example.com",
    "phone": "+1 555 0100",
    "whatsapp": "+1 555 0101",
    "website": "https://jane.dev",
    "address": "1 Main St",
    "map_link": "https://maps/jane",
}

_CONTACT_CHANNELS = {
    "email": "email", "phone": "phone", "whatsapp": "whatsapp",
    "website": "website", "address": "address", "map_link": "map",
}


def _shows_field(tree, field):
    if field in _CONTACT_CHANNELS:
        return any(
            n.props["channel"] == _CONTACT_CHANNELS[field]
            for n in tree.find_all("contact")
        )
    return tree.find(field) is not None


def test_field_table_covers_every_optional_display_field():
    assert set(_FIELD_VALUES) == set(card_config.OPTIONAL_DISPLAY_FIELDS)


@pytest.mark.parametrize("field", card_config.OPTIONAL_DISPLAY_FIELDS)
def test_compact_shows_field_when_set(jane, field):
    config = replace(jane, **{field: _FIELD_VALUES[field]})
    assert _shows_field(render(config, ()), field)


@pytest.mark.parametrize("blank", ["", "   "])
@pytest.mark.parametrize("field", card_config.OPTIONAL_DISPLAY_FIELDS)
def test_compact_omits_field_when_blank(jane, field, blank):
    config = replace(jane, **{field: blank})
    assert not _shows_field(render(config, ()), field)


def test_compact_with_every_field_set_shows_all(jane):
    config = replace(jane, **_FIELD_VALUES)
    tree = render(config, ())
    assert all(_shows_field(tree, field) for field in _FIELD_VALUES)
    assert len(tree.find_all("contact")) == 6


def test_preview_link_count_matches_rendered_links(jane):
    links = social_links.set_active(_links(3), 1, False)
    tree = render(jane, links)
    assert tree.find("preview_info").props["link_count"] == 2
    assert tree.find("social_links").props["total"] == 2


def test_preview_profession_placeholder_for_whitespace(jane):
    tree = render(replace(jane, profession="   "), ())
    assert tree.find("preview_info").props["profession"] == "Not set"

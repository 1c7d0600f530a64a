"""vCard Export — tests for the contact file builder."""

from dataclasses import replace
from uuid import uuid4

from cardsmith.core import card_config, social_links, vcard
from cardsmith.core.social_links import LinkCandidate


def _jane():
    return card_config.update(card_config.create(uuid4()), {
        "title": "Jane Doe", "username": "jane", "company": "Acme, Inc.",
        "profession": "Engineer", "phone": "+1 555", "email": "jane@example.com",
    })


def test_vcard_structure():
    text = vcard.build_vcard(_jane())
    lines = text.split("\r\n")
    assert lines[0] == "BEGIN:VCARD"
    assert lines[1] == "VERSION:3.0"
    assert "FN:Jane Doe" in lines
    assert "ORG:Acme\\, Inc." in lines
    assert "TITLE:Engineer" in lines
    assert "TEL;TYPE=CELL:+1 555" in lines
    assert "EMAIL;TYPE=INTERNET:jane@example.com" in lines
    assert text.endswith("END:VCARD\r\n")


def test_blank_fields_omitted():
    text = vcard.build_vcard(card_config.update(card_config.create(None), {"title": "X"}))
    assert "ORG" not in text
    assert "TEL" not in text
    assert "URL" not in text


def test_whatsapp_same_as_phone_not_repeated():
    config = replace(_jane(), whatsapp="+1 555")
    assert "MSG" not in vcard.build_vcard(config)


def test_url_from_website_link():
    links = social_links.add((), LinkCandidate(url="https://jane.dev", platform="Website"))
    assert "URL:https://jane.dev" in vcard.build_vcard(_jane(), links)


def test_escape_text():
    assert vcard.escape_text("a;b\nc\\") == "a\\;b\\nc\\\\"


def test_filename():
    assert vcard.vcard_filename(_jane()) == "jane.vcf"
    assert vcard.vcard_filename(card_config.create(None)) == "contact.vcf"

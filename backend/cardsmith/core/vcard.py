"""vCard Export — builds a vCard 3.0 contact file for a public card.

Invariants:
    - Lines joined with CRLF; text values escaped per RFC 2426 (\\ ; , newline)
    - Blank optional fields produce no property line
    - URL is the card website, else the first active Website link
"""

from typing import Sequence

from cardsmith.core.card_config import CardConfiguration, is_blank
from cardsmith.core.social_links import SocialLinkEntry, active_links


def escape_text(value: str) -> str:
    return (
        value.replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\r\n", "\\n")
        .replace("\n", "\\n")
    )


def _website(config: CardConfiguration, links: Sequence[SocialLinkEntry]) -> str | None:
    if not is_blank(config.website):
        return config.website.strip()
    first = next(
        (link for link in active_links(tuple(links))
         if link.platform.strip().lower() in ("website", "web", "url")),
        None,
    )
    return first.url if first else None


def build_vcard(config: CardConfiguration, links: Sequence[SocialLinkEntry] = ()) -> str:
    name = escape_text(config.title.strip())
    lines = [
        "BEGIN:VCARD",
        "VERSION:3.0",
        f"N:{name};;;;",
        f"FN:{name}",
    ]
    if not is_blank(config.company):
        lines.append(f"ORG:{escape_text(config.company)}")
    if not is_blank(config.profession):
        lines.append(f"TITLE:{escape_text(config.profession)}")
    if not is_blank(config.phone):
        lines.append(f"TEL;TYPE=CELL:{config.phone.strip()}")
    if not is_blank(config.whatsapp) and config.whatsapp.strip() != config.phone.strip():
        lines.append(f"TEL;TYPE=CELL,MSG:{config.whatsapp.strip()}")
    if not is_blank(config.email):
        lines.append(f"EMAIL;TYPE=INTERNET:{config.email.strip()}")
    url = _website(config, links)
    if url:
        lines.append(f"URL:{url}")
    if not is_blank(config.address):
        lines.append(f"ADR;TYPE=WORK:;;{escape_text(config.address)};;;;")
    if not is_blank(config.avatar_url):
        lines.append(f"PHOTO;VALUE=URI:{config.avatar_url.strip()}")
    if not is_blank(config.tagline):
        lines.append(f"NOTE:{escape_text(config.tagline)}")
    lines.append("END:VCARD")
    return "\r\n".join(lines) + "\r\n"


def vcard_filename(config: CardConfiguration) -> str:
    base = config.username or "_".join(config.title.split()) or "contact"
    return f"{base}.vcf"

"""Public Card Routes — full-page render and vCard download for published cards.

Invariants:
    - Only published cards resolve; anything else is a 404 CARD_NOT_FOUND
    - No owner identity is required or exposed
    - /c/{id} resolves by id, /api/v1/public/{ref} by slug or id
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response

from cardsmith.core.domain_types import RenderMode
from cardsmith.core.rendering import render
from cardsmith.core.row_mapping import LoadedCard
from cardsmith.core.vcard import build_vcard, vcard_filename
from cardsmith.api.dependencies import get_card_service
from cardsmith.services.card_service import CardService

logger = logging.getLogger(__name__)
router = APIRouter(tags=["public"])


def _public_payload(loaded: LoadedCard) -> dict:
    config = loaded.config
    tree = render(config, loaded.links, mode=RenderMode.FULL)
    return {
        "id": str(config.id),
        "slug": config.username or None,
        "title": config.title,
        "vcard_path": f"/api/v1/public/{config.username or config.id}/vcf",
        "tree": tree.to_dict(),
    }


@router.get("/c/{card_id}")
async def get_card_by_id(
    card_id: UUID, service: CardService = Depends(get_card_service),
):
    return _public_payload(await service.load_public(card_id))


@router.get("/api/v1/public/{reference}")
async def get_public_card(
    reference: str, service: CardService = Depends(get_card_service),
):
    """Full-page render of a published card by slug (or id)."""
    return _public_payload(await service.load_public(reference))


@router.get("/api/v1/public/{reference}/vcf")
async def get_public_vcard(
    reference: str, service: CardService = Depends(get_card_service),
):
    loaded = await service.load_public(reference)
    return Response(
        content=build_vcard(loaded.config, loaded.links),
        media_type="text/vcard",
        headers={
            "Content-Disposition": f"attachment; filename={vcard_filename(loaded.config)}",
        },
    )

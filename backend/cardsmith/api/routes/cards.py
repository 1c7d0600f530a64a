"""Card Routes — owner-facing load, save, delete and live preview.

Invariants:
    - Every route except /preview is scoped to the X-Owner-Id owner
    - POST saves the whole editor state (card + links) in one call; link ids are reassigned
    - /preview is pure: renders the posted state without touching the store
    - Save failures surface as CardsmithError envelopes (400 / 404 / 409 / 503)
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Response, status

from cardsmith.config import get_settings
from cardsmith.core.domain_types import CardId, OwnerId, RenderMode
from cardsmith.core.rendering import render
from cardsmith.core.row_mapping import LoadedCard
from cardsmith.api.dependencies import get_card_service, get_owner_id
from cardsmith.schemas.card import CardIn, CardOut, PreviewRequest
from cardsmith.services.card_service import CardService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/cards", tags=["cards"])


def _out(loaded: LoadedCard) -> CardOut:
    settings = get_settings()
    return CardOut.from_loaded(
        loaded, require_slug=settings.require_slug, base_url=settings.public_base_url,
    )


@router.get("")
async def list_cards(
    owner_id: OwnerId = Depends(get_owner_id),
    service: CardService = Depends(get_card_service),
):
    """All cards of the owner, newest first."""
    cards = await service.list_for_owner(owner_id)
    return {"cards": [_out(c).model_dump(mode="json") for c in cards]}


@router.get("/current", response_model=CardOut)
async def get_current_card(
    owner_id: OwnerId = Depends(get_owner_id),
    service: CardService = Depends(get_card_service),
):
    """The owner's current card, or an unsaved blank card seeded from the profile."""
    loaded = await service.load_for_owner(owner_id)
    if loaded is None:
        loaded = LoadedCard(config=await service.new_card(owner_id), links=())
    return _out(loaded)


@router.get("/{card_id}", response_model=CardOut)
async def get_card(
    card_id: UUID,
    owner_id: OwnerId = Depends(get_owner_id),
    service: CardService = Depends(get_card_service),
):
    return _out(await service.load(CardId(card_id), owner_id))


@router.post("", response_model=CardOut)
async def save_card(
    body: CardIn,
    response: Response,
    owner_id: OwnerId = Depends(get_owner_id),
    service: CardService = Depends(get_card_service),
):
    """Create (no id) or update (id bound) the card, then replace its links."""
    config = body.to_config(owner_id)
    saved = await service.save(config, body.to_links())
    response.status_code = (
        status.HTTP_201_CREATED if body.id is None else status.HTTP_200_OK
    )
    return _out(saved)


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: UUID,
    owner_id: OwnerId = Depends(get_owner_id),
    service: CardService = Depends(get_card_service),
):
    """Delete the card and its social links."""
    await service.delete(CardId(card_id), owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/preview")
async def preview_card(body: PreviewRequest):
    """Render the posted editor state. COMPACT by default."""
    tree = render(
        body.card.to_config(None),
        body.card.to_links(),
        media=[m.to_core() for m in body.media],
        reviews=[r.to_core() for r in body.reviews],
        mode=RenderMode(body.mode),
    )
    return {"mode": body.mode, "tree": tree.to_dict()}

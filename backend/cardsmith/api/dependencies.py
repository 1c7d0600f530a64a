"""Route Dependencies — owner identity and per-request CardService wiring.

Invariants:
    - The owner id arrives in the X-Owner-Id header, set by the upstream auth layer
    - One CardService (and one SqlCardStore) per request, bound to the request's DB session
"""

from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from cardsmith.config import get_settings
from cardsmith.core.domain_types import OwnerId
from cardsmith.infrastructure.database import get_db
from cardsmith.infrastructure.sql_card_store import SqlCardStore
from cardsmith.services.card_service import CardService


async def get_owner_id(x_owner_id: UUID = Header(...)) -> OwnerId:
    return OwnerId(x_owner_id)


async def get_card_service(db: AsyncSession = Depends(get_db)) -> CardService:
    return CardService(SqlCardStore(db), require_slug=get_settings().require_slug)

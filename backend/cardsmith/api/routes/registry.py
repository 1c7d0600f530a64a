"""Registry Route — read-only catalog of themes, layouts, fonts, shapes and platforms."""

from fastapi import APIRouter

from cardsmith.core.registry import catalog

router = APIRouter(prefix="/api/v1/registry", tags=["registry"])


@router.get("")
async def get_registry():
    """Everything the editor's option pickers need."""
    return catalog()

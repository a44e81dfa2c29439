"""Search across local hero and item records."""

from fastapi import APIRouter, Depends, Query

from dependencies import get_encyclopedia
from services.encyclopedia import Encyclopedia

router = APIRouter()


@router.get("/search")
async def search(
    q: str = Query(""),
    encyclopedia: Encyclopedia = Depends(get_encyclopedia),
) -> list[dict]:
    """Up to 15 heroes and items matching q. An empty query returns []."""
    return await encyclopedia.search(q)

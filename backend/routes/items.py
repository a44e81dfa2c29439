"""Item routes."""

from fastapi import APIRouter, Depends

from dependencies import get_encyclopedia
from services.encyclopedia import Encyclopedia

router = APIRouter()


@router.get("/items")
async def list_items(encyclopedia: Encyclopedia = Depends(get_encyclopedia)) -> list[dict]:
    return await encyclopedia.list_items()


@router.get("/items/{item_id}")
async def item_detail(item_id: int, encyclopedia: Encyclopedia = Depends(get_encyclopedia)) -> dict:
    return await encyclopedia.get_item(item_id)

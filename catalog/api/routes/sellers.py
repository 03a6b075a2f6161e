from typing import Any, List, Optional

from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorCollection

from catalog.database.mongo import get_products_collection
from catalog.services import product_service
from catalog.services.errors import invalid_input

router = APIRouter()


@router.get("/my-products", response_model=List[dict[str, Any]])
async def list_my_products(
    sellerId: Optional[str] = None,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    """Products listed by one seller, newest first."""
    if not sellerId:
        raise invalid_input("Seller ID required")
    return await product_service.list_by_seller(collection, sellerId)

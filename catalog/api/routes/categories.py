from fastapi import APIRouter, Depends
from motor.motor_asyncio import AsyncIOMotorCollection

from catalog.database.mongo import get_products_collection
from catalog.services import product_service

router = APIRouter()


@router.get("", response_model=list)
async def list_categories(collection: AsyncIOMotorCollection = Depends(get_products_collection)):
    return await product_service.list_categories(collection)

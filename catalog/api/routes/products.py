from typing import Any, List, Optional

from fastapi import APIRouter, Body, Depends
from motor.motor_asyncio import AsyncIOMotorCollection

from catalog.database.mongo import get_products_collection
from catalog.models import InsertedResponse, MessageResponse, ProductPage
from catalog.services import product_service
from catalog.services.errors import invalid_input
from catalog.services.query_builder import parse_pagination, parse_price_range

router = APIRouter()

# Fixed paths are registered ahead of "/{product_id}" so they are not read as ids.


@router.get("", response_model=ProductPage)
async def list_products(
    limit: Optional[str] = None,
    skip: Optional[str] = None,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    page_limit, page_skip = parse_pagination(limit, skip)
    return await product_service.list_products(collection, page_limit, page_skip)


@router.post("", status_code=201, response_model=InsertedResponse)
async def create_product(
    body: dict[str, Any] = Body(...),
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    inserted_id = await product_service.create_product(collection, body)
    return {"message": "Product added successfully", "insertedId": inserted_id}


@router.get("/search", response_model=List[dict[str, Any]])
async def search_products(
    q: Optional[str] = None,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    if not q:
        raise invalid_input("Query required")
    return await product_service.search_products(collection, q)


@router.get("/filter", response_model=List[dict[str, Any]])
async def filter_by_price(
    minPrice: Optional[str] = None,
    maxPrice: Optional[str] = None,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    low, high = parse_price_range(minPrice, maxPrice)
    return await product_service.filter_by_price(collection, low, high)


@router.get("/category/{name}", response_model=ProductPage)
async def list_by_category(
    name: str,
    limit: Optional[str] = None,
    skip: Optional[str] = None,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    page_limit, page_skip = parse_pagination(limit, skip)
    return await product_service.list_by_category(collection, name, page_limit, page_skip)


@router.get("/brand/{brand}", response_model=List[dict[str, Any]])
async def list_by_brand(
    brand: str,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    return await product_service.list_by_brand(collection, brand)


@router.get("/tags/{tag}", response_model=List[dict[str, Any]])
async def list_by_tag(
    tag: str,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    return await product_service.list_by_tag(collection, tag)


@router.get("/{product_id}", response_model=dict[str, Any])
async def get_product(
    product_id: str,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    return await product_service.get_product(collection, product_id)


@router.put("/{product_id}", response_model=MessageResponse)
async def update_product(
    product_id: str,
    body: dict[str, Any] = Body(...),
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    await product_service.update_product(collection, product_id, body)
    return {"message": "Product updated successfully"}


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    product_id: str,
    collection: AsyncIOMotorCollection = Depends(get_products_collection),
):
    await product_service.delete_product(collection, product_id)
    return {"message": "Product deleted successfully"}

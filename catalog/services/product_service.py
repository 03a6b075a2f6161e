import logging
from typing import Any

from bson.errors import BSONError
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import DESCENDING
from pymongo.errors import PyMongoError

from catalog.services import query_builder as qb
from catalog.services.errors import not_found, store_failure
from catalog.utils.serialization import docs_to_list, to_jsonable

logger = logging.getLogger(__name__)

# driver failures plus client-side BSON encoding failures (oversized ints, bad keys)
STORE_ERRORS = (PyMongoError, BSONError, OverflowError)


async def _paginate(collection: AsyncIOMotorCollection, query: dict, limit: int, skip: int) -> dict:
    total = await collection.count_documents(query)
    docs = await collection.find(query).skip(skip).limit(limit).to_list(None)
    return {"products": docs_to_list(docs), "total": total, "limit": limit, "skip": skip}


async def list_products(collection: AsyncIOMotorCollection, limit: int, skip: int) -> dict:
    try:
        return await _paginate(collection, {}, limit, skip)
    except STORE_ERRORS as e:
        logger.exception("Listing products failed: %s", e)
        raise store_failure("Failed to fetch products") from e


async def get_product(collection: AsyncIOMotorCollection, product_id: str) -> dict:
    query = qb.id_filter(product_id)
    try:
        doc = await collection.find_one(query)
    except STORE_ERRORS as e:
        logger.exception("Fetching product %s failed: %s", product_id, e)
        raise store_failure("Failed to fetch product") from e

    if not doc:
        raise not_found()
    return to_jsonable(doc)


async def create_product(collection: AsyncIOMotorCollection, body: dict[str, Any]) -> str:
    doc = qb.build_new_document(body)
    try:
        result = await collection.insert_one(doc)
    except STORE_ERRORS as e:
        logger.exception("Inserting product failed: %s", e)
        raise store_failure("Failed to add product") from e

    logger.info("Created product %s", result.inserted_id)
    return str(result.inserted_id)


async def update_product(collection: AsyncIOMotorCollection, product_id: str, body: dict[str, Any]) -> None:
    """
    Merge ``body`` into the matched product with ``$set``.

    Never upserts: an unknown id is a not-found error. An empty body with
    timestamp stamping disabled only checks that the product exists.
    """
    query = qb.id_filter(product_id)
    update = qb.build_update(body)
    try:
        if update["$set"]:
            matched = (await collection.update_one(query, update)).matched_count
        else:
            matched = await collection.count_documents(query, limit=1)
    except STORE_ERRORS as e:
        logger.exception("Updating product %s failed: %s", product_id, e)
        raise store_failure("Failed to update product") from e

    if matched == 0:
        raise not_found()
    logger.info("Updated product %s", product_id)


async def delete_product(collection: AsyncIOMotorCollection, product_id: str) -> None:
    query = qb.id_filter(product_id)
    try:
        result = await collection.delete_one(query)
    except STORE_ERRORS as e:
        logger.exception("Deleting product %s failed: %s", product_id, e)
        raise store_failure("Failed to delete product") from e

    if result.deleted_count == 0:
        raise not_found()
    logger.info("Deleted product %s", product_id)


async def list_categories(collection: AsyncIOMotorCollection) -> list:
    try:
        values = await collection.distinct("category")
    except STORE_ERRORS as e:
        logger.exception("Loading categories failed: %s", e)
        raise store_failure("Failed to load categories") from e
    return to_jsonable(values)


async def list_by_category(collection: AsyncIOMotorCollection, category: str, limit: int, skip: int) -> dict:
    try:
        return await _paginate(collection, {"category": category}, limit, skip)
    except STORE_ERRORS as e:
        logger.exception("Listing category '%s' failed: %s", category, e)
        raise store_failure("Failed to fetch category products") from e


async def _find_all(collection: AsyncIOMotorCollection, query: dict, failure_message: str, sort=None) -> list[dict]:
    try:
        cursor = collection.find(query)
        if sort:
            cursor = cursor.sort(sort)
        docs = await cursor.to_list(None)
    except STORE_ERRORS as e:
        logger.exception("%s (filter=%s): %s", failure_message, query, e)
        raise store_failure(failure_message) from e
    return docs_to_list(docs)


async def search_products(collection: AsyncIOMotorCollection, q: str) -> list[dict]:
    return await _find_all(collection, qb.build_search_filter(q), "Search failed")


async def filter_by_price(collection: AsyncIOMotorCollection, low: float, high: float) -> list[dict]:
    return await _find_all(collection, qb.build_price_filter(low, high), "Filtering failed")


async def list_by_brand(collection: AsyncIOMotorCollection, brand: str) -> list[dict]:
    return await _find_all(collection, {"brand": brand}, "Brand filter failed")


async def list_by_tag(collection: AsyncIOMotorCollection, tag: str) -> list[dict]:
    return await _find_all(collection, {"tags": tag}, "Tag filter failed")


async def list_by_seller(collection: AsyncIOMotorCollection, seller_id: str) -> list[dict]:
    # newest first
    return await _find_all(
        collection,
        {"sellerId": seller_id},
        "Failed to fetch your products",
        sort=[("meta.createdAt", DESCENDING)],
    )

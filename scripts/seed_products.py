import json
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(ROOT)

from pymongo import MongoClient
from catalog.config import settings
from catalog.services.query_builder import build_new_document


def seed_products(path: str) -> int:
    """Insert every product from a JSON array file, stamped like the API does."""
    with open(path) as f:
        products = json.load(f)

    if not isinstance(products, list):
        raise ValueError(f"{path} must contain a JSON array of products")

    docs = [build_new_document(p) for p in products]
    if not docs:
        print("Nothing to insert")
        return 0

    client = MongoClient(settings.mongo_uri)
    try:
        collection = client[settings.MONGO_DB][settings.PRODUCTS_COLLECTION]
        result = collection.insert_many(docs)
    finally:
        client.close()

    print(f"✔ Inserted {len(result.inserted_ids)} products into {settings.MONGO_DB}.{settings.PRODUCTS_COLLECTION}")
    return len(result.inserted_ids)


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/seed_products.py <products.json>")
        sys.exit(1)
    seed_products(sys.argv[1])

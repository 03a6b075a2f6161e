import json
import os
import sys

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.append(ROOT)

from pymongo import MongoClient
from catalog.config import settings

client = MongoClient(settings.mongo_uri)
collection = client[settings.MONGO_DB][settings.PRODUCTS_COLLECTION]

categories = [c for c in collection.distinct("category") if c is not None]

with open("categories.json", "w") as f:
    json.dump(sorted(categories, key=str), f, indent=2)

print(f"Exported {len(categories)} categories to categories.json")
client.close()

"""
Turn request input (query string, path segments, JSON body) into Mongo
filter, update and pagination values.
"""
import re
from datetime import datetime, timezone
from typing import Any, Optional, Tuple

from bson import ObjectId

from catalog.config import settings
from catalog.services.errors import invalid_input

_INT_PREFIX = re.compile(r"^\s*([+-]?\d+)")
_FLOAT_PREFIX = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")

SEARCH_FIELDS = ("title", "description", "tags")

# limit and skip are sent to the server as int64
MAX_INT64 = 2 ** 63 - 1


def parse_leading_int(value: Optional[str]) -> Optional[int]:
    """Parse the leading integer of ``value`` ("12abc" -> 12); None if there is none."""
    if value is None:
        return None
    match = _INT_PREFIX.match(value)
    return int(match.group(1)) if match else None


def parse_leading_float(value: Optional[str]) -> Optional[float]:
    if value is None:
        return None
    match = _FLOAT_PREFIX.match(value)
    return float(match.group(1)) if match else None


def parse_pagination(limit: Optional[str], skip: Optional[str]) -> Tuple[int, int]:
    """
    Resolve ``limit``/``skip`` query values.

    - limit: default when absent, non-numeric or < 1; capped by MAX_PAGE_LIMIT if set, and by int64
    - skip: 0 when absent, non-numeric or negative; capped by int64
    """
    default_limit = settings.DEFAULT_PAGE_LIMIT

    parsed_limit = parse_leading_int(limit)
    if parsed_limit is None or parsed_limit < 1:
        parsed_limit = default_limit
    if settings.MAX_PAGE_LIMIT is not None:
        parsed_limit = min(parsed_limit, settings.MAX_PAGE_LIMIT)
    parsed_limit = min(parsed_limit, MAX_INT64)

    parsed_skip = parse_leading_int(skip)
    if parsed_skip is None or parsed_skip < 0:
        parsed_skip = 0
    parsed_skip = min(parsed_skip, MAX_INT64)

    return parsed_limit, parsed_skip


def parse_price_range(min_price: Optional[str], max_price: Optional[str]) -> Tuple[float, float]:
    # zero falls back to the default, same as an absent value
    low = parse_leading_float(min_price) or 0
    high = parse_leading_float(max_price) or settings.DEFAULT_MAX_PRICE
    return low, high


def parse_object_id(product_id: str) -> ObjectId:
    if not ObjectId.is_valid(product_id):
        raise invalid_input("Invalid product ID")
    return ObjectId(product_id)


def id_filter(product_id: str) -> dict:
    return {"_id": parse_object_id(product_id)}


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _strip_id(body: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in body.items() if k != "_id"}


def build_new_document(body: dict[str, Any]) -> dict[str, Any]:
    doc = _strip_id(body)
    if settings.STAMP_TIMESTAMPS:
        now = _now()
        doc["createdAt"] = now
        doc["updatedAt"] = now
    return doc


def build_update(body: dict[str, Any]) -> dict[str, Any]:
    fields = _strip_id(body)
    if settings.STAMP_TIMESTAMPS:
        fields["updatedAt"] = _now()
    return {"$set": fields}


def build_search_filter(q: str) -> dict:
    pattern = re.escape(q)
    return {
        "$or": [
            {field: {"$regex": pattern, "$options": "i"}}
            for field in SEARCH_FIELDS
        ]
    }


def build_price_filter(low: float, high: float) -> dict:
    return {"price": {"$gte": low, "$lte": high}}

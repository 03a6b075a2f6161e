import json
from datetime import datetime, timezone
from typing import Any

from bson import Decimal128, ObjectId, json_util


def to_jsonable(value: Any) -> Any:
    """
    Render a stored document as plain JSON values, walking dicts and lists.

    ObjectId becomes its hex string, datetime an ISO-8601 string in UTC
    (naive values are stored UTC), Decimal128 its decimal string. Any other
    BSON type (Binary, Regex, Timestamp, ...) uses its extended JSON form.
    """
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, Decimal128):
        return str(value.to_decimal())
    if isinstance(value, dict):
        return {k: to_jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_jsonable(v) for v in value]
    if value is None or isinstance(value, (str, bool, int, float)):
        return value
    return json.loads(json_util.dumps(value))


def docs_to_list(docs: list[dict]) -> list[dict]:
    return [to_jsonable(d) for d in docs]

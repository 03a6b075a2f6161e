from typing import Any, List

from pydantic import BaseModel


class ProductPage(BaseModel):
    products: List[dict[str, Any]]
    total: int
    limit: int
    skip: int


class MessageResponse(BaseModel):
    message: str


class InsertedResponse(MessageResponse):
    insertedId: str

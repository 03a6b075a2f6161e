import logging
from datetime import timezone

from fastapi import Request
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo.server_api import ServerApi

from catalog.config import Settings

logger = logging.getLogger(__name__)


class MongoStore:
    """
    Owns the single Mongo client for the process.

    Created once in the app lifespan and kept on ``app.state.store``;
    handlers reach the products collection through ``get_products_collection``.
    """

    def __init__(self, settings: Settings):
        self.settings = settings
        self.client: AsyncIOMotorClient | None = None

    def connect(self) -> None:
        self.client = AsyncIOMotorClient(
            self.settings.mongo_uri,
            server_api=ServerApi("1", strict=True, deprecation_errors=True),
            tz_aware=True,
            tzinfo=timezone.utc,
        )
        logger.info("MongoDB client created for database '%s'", self.settings.MONGO_DB)

    def close(self) -> None:
        if self.client is not None:
            self.client.close()
            self.client = None
            logger.info("MongoDB client closed")

    @property
    def products(self) -> AsyncIOMotorCollection:
        if self.client is None:
            raise RuntimeError("MongoStore is not connected")
        db = self.client[self.settings.MONGO_DB]
        return db[self.settings.PRODUCTS_COLLECTION]


def get_products_collection(request: Request) -> AsyncIOMotorCollection:
    return request.app.state.store.products

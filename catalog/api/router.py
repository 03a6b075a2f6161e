from fastapi import APIRouter
from catalog.api.routes import categories, products, sellers

api_router = APIRouter()

api_router.include_router(products.router, prefix="/products", tags=["Products"])
api_router.include_router(categories.router, prefix="/categories", tags=["Categories"])
api_router.include_router(sellers.router, tags=["Sellers"])

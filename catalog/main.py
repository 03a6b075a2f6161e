import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse, Response

from catalog.api.router import api_router
from catalog.config import settings
from catalog.database.mongo import MongoStore
from catalog.services.errors import CatalogError

# Configure logging
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store = MongoStore(settings)
    store.connect()
    app.state.store = store
    try:
        yield
    finally:
        store.close()


app = FastAPI(title="Product Catalog Service", lifespan=lifespan)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=settings.CORS_METHODS,
    allow_headers=settings.CORS_HEADERS,
)


# Registered after CORSMiddleware so it runs outermost and answers preflights too.
@app.middleware("http")
async def short_circuit_options(request: Request, call_next):
    # Any OPTIONS request gets a bare 200 with the CORS policy headers.
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=_cors_headers(request.headers.get("origin")))
    return await call_next(request)


def _allow_origin(origin: str | None) -> str | None:
    # The header carries one value: "*" or the matching request origin.
    if "*" in settings.CORS_ORIGINS:
        return "*"
    if origin and origin in settings.CORS_ORIGINS:
        return origin
    return None


def _cors_headers(origin: str | None) -> dict:
    headers = {
        "Access-Control-Allow-Methods": ", ".join(settings.CORS_METHODS),
        "Access-Control-Allow-Headers": ", ".join(settings.CORS_HEADERS),
    }
    allowed = _allow_origin(origin)
    if allowed is not None:
        headers["Access-Control-Allow-Origin"] = allowed
        if allowed != "*":
            headers["Vary"] = "Origin"
    return headers


@app.exception_handler(CatalogError)
async def catalog_error_handler(request: Request, exc: CatalogError):
    return JSONResponse({"message": exc.message}, status_code=exc.status_code)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    logger.info("Rejected %s %s: %s", request.method, request.url.path, exc.errors())
    return JSONResponse({"message": "Invalid request body"}, status_code=400)


app.include_router(api_router)


@app.get("/", response_class=PlainTextResponse)
def root():
    return "Server is running"


@app.get("/health")
def health_check():
    return {"status": "healthy"}


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)

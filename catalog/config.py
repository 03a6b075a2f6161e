from urllib.parse import quote_plus

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    PORT: int = 5000
    HOST: str = "0.0.0.0"

    # Atlas credentials; MONGO_URI wins when set
    DB_USER: str | None = None
    DB_PASS: str | None = None
    MONGO_HOST: str = "cluster0.vormdea.mongodb.net"
    MONGO_URI: str | None = None
    MONGO_DB: str = "flixo-cart"
    PRODUCTS_COLLECTION: str = "products"

    STAMP_TIMESTAMPS: bool = True
    DEFAULT_PAGE_LIMIT: int = 24
    MAX_PAGE_LIMIT: int | None = None
    DEFAULT_MAX_PRICE: float = 999999

    CORS_ORIGINS: list[str] = ["*"]
    CORS_METHODS: list[str] = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    CORS_HEADERS: list[str] = ["Content-Type", "Authorization"]

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"

    @property
    def mongo_uri(self) -> str:
        if self.MONGO_URI:
            return self.MONGO_URI
        user = quote_plus(self.DB_USER or "")
        password = quote_plus(self.DB_PASS or "")
        return (
            f"mongodb+srv://{user}:{password}@{self.MONGO_HOST}/{self.MONGO_DB}"
            "?retryWrites=true&w=majority"
        )


settings = Settings()

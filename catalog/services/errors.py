from enum import Enum


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    STORE_FAILURE = "store_failure"


STATUS_BY_KIND = {
    ErrorKind.INVALID_INPUT: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.STORE_FAILURE: 500,
}


class CatalogError(Exception):
    """Raised by the product service; rendered once by the app exception handler."""

    def __init__(self, kind: ErrorKind, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def status_code(self) -> int:
        return STATUS_BY_KIND[self.kind]


def invalid_input(message: str) -> CatalogError:
    return CatalogError(ErrorKind.INVALID_INPUT, message)


def not_found(message: str = "Product not found") -> CatalogError:
    return CatalogError(ErrorKind.NOT_FOUND, message)


def store_failure(message: str) -> CatalogError:
    return CatalogError(ErrorKind.STORE_FAILURE, message)

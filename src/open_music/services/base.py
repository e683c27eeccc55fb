"""Error types shared by repositories and the HTTP layer."""


class APIError(Exception):
    """Base exception for errors surfaced to API clients."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(APIError):
    """Raised when a referenced album, like, or row does not exist."""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message, status_code=404)


class ConflictError(APIError):
    """Raised when a write would violate a business rule, such as a duplicate like."""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message, status_code=409)


class ValidationError(APIError):
    """Raised when a storage operation fails or does not affect the expected row."""

    def __init__(self, message: str = "Operation could not be completed"):
        super().__init__(message, status_code=400)


class CacheError(Exception):
    """Raised by cache backends when the cache server cannot be reached or errors."""

"""Application-level exceptions."""

from typing import Optional


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class FetchError(AppError):
    """Raised when an upstream page cannot be fetched (network error, timeout, non-2xx)."""

    def __init__(self, url: str, reason: str):
        self.url = url
        self.reason = reason
        super().__init__(f"Failed to fetch {url}: {reason}", code="FETCH_ERROR")


class ParseError(AppError):
    """Raised when an expected field is absent or malformed in fetched content."""

    def __init__(self, field: str, raw: Optional[str] = None):
        self.field = field
        self.raw = raw
        super().__init__(f"Could not parse {field}: {raw!r}", code="PARSE_ERROR")

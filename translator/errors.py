"""Shared exceptions for translation calls."""
from __future__ import annotations


class TranslationError(IOError):
    """Raised when translation fails for a reason the host must handle."""


class RequestTimeoutError(TranslationError):
    """Raised when connecting to or reading from the API timed out."""


class TransportError(TranslationError):
    """Raised for network failures other than timeouts."""


class ParseError(TranslationError):
    """Raised when the API response does not have the expected shape."""

    def __init__(self, message: str = "无法解析API响应"):
        super().__init__(message)


class ApiError(TranslationError):
    """Raised when the API answers with a non-200 status."""

    def __init__(self, status_code: int | None, message: str):
        super().__init__(message)
        self.status_code = status_code


class AuthError(ApiError):
    def __init__(self, status_code: int | None = 401, message: str = "API Key无效或已过期"):
        super().__init__(status_code, message)


class RateLimitError(ApiError):
    def __init__(self, status_code: int | None = 429, message: str = "请求过于频繁，请稍后再试"):
        super().__init__(status_code, message)


class ServerError(ApiError):
    def __init__(self, status_code: int | None = 500, message: str = "Kimi服务器错误，请稍后再试"):
        super().__init__(status_code, message)


class HttpError(ApiError):
    """Any other non-200 status; keeps the raw error body."""

    def __init__(self, status_code: int, body: str):
        super().__init__(status_code, f"HTTP错误 {status_code}: {body}")
        self.body = body

"""Translation package for the Kimi translation plugin."""

from translator.base import (
    PluginContext,
    SoftError,
    TranslationEngine,
    TranslationRequest,
    TranslationResult,
)
from translator.engines import KimiTranslationEngine
from translator.errors import (
    ApiError,
    AuthError,
    HttpError,
    ParseError,
    RateLimitError,
    RequestTimeoutError,
    ServerError,
    TranslationError,
    TransportError,
)

__all__ = [
    "ApiError",
    "AuthError",
    "HttpError",
    "KimiTranslationEngine",
    "ParseError",
    "PluginContext",
    "RateLimitError",
    "RequestTimeoutError",
    "ServerError",
    "SoftError",
    "TranslationEngine",
    "TranslationError",
    "TranslationRequest",
    "TranslationResult",
    "TransportError",
]

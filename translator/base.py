"""Core translator abstractions: value types, host context and the engine contract."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional

from settings_manager import SettingsStore

HOST_LOGGER_NAME = "kimi_translator.host"


class SoftError(Enum):
    """User-visible failures returned as text instead of raised."""

    MISSING_API_KEY = "错误：请在插件设置中配置API Key"
    TIMEOUT = "错误：连接超时，请检查网络连接后重试"
    INTERRUPTED = "错误：请求被中断"

    @property
    def message(self) -> str:
        return self.value


@dataclass(frozen=True)
class TranslationRequest:
    """Single translation unit built per call."""

    text: str
    src_lang: str
    dst_lang: str


@dataclass(frozen=True)
class ApiMessage:
    """One role-tagged chat message."""

    role: str
    content: str

    def to_dict(self) -> Dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class TranslationResult:
    """
    Successful outcome of a translation call.

    Carries either the translated text or a soft error. Hard errors are never
    represented here; they are raised as `TranslationError`.
    """

    translated_text: str = ""
    soft_error: Optional[SoftError] = None

    @classmethod
    def soft(cls, error: SoftError) -> "TranslationResult":
        return cls(translated_text="", soft_error=error)

    @property
    def is_soft_error(self) -> bool:
        return self.soft_error is not None

    @property
    def display_text(self) -> str:
        """Text the host renders in place of a translation."""
        if self.soft_error is not None:
            return self.soft_error.message
        return self.translated_text


class PluginContext:
    """Services the host hands to a plugin: preferences and a log sink."""

    def __init__(self, preferences: SettingsStore, logger: Optional[logging.Logger] = None) -> None:
        self._preferences = preferences
        self.logger = logger or logging.getLogger(HOST_LOGGER_NAME)

    def get_preferences(self) -> SettingsStore:
        return self._preferences

    def log(self, exc: BaseException) -> None:
        """Report an exception to the host log with its traceback."""
        self.logger.error(
            "%s: %s",
            type(exc).__name__,
            exc,
            exc_info=(type(exc), exc, exc.__traceback__),
        )


class TranslationEngine:
    """
    Contract a host application expects from a translation plugin.

    The host calls `initialize()` once after construction, `on_start()` when a
    UI session begins, `translate()` per string, and `on_error()` for any
    exception that escaped the plugin.
    """

    def __init__(self, context: PluginContext) -> None:
        self.context = context

    def initialize(self) -> None:
        self.init()

    def init(self) -> None:
        """Hook for subclasses; runs once from `initialize()`."""

    def name(self) -> str:
        raise NotImplementedError

    def load_source_languages(self) -> List[str]:
        raise NotImplementedError

    def load_target_languages(self, source_language: str) -> List[str]:
        raise NotImplementedError

    def get_language_display_name(self, language: str) -> str:
        return language

    def translate(self, text: str, source_language: str, target_language: str) -> str:
        request = TranslationRequest(text=text, src_lang=source_language, dst_lang=target_language)
        return self.translate_request(request).display_text

    def translate_request(self, request: TranslationRequest) -> TranslationResult:
        """Translate a single request."""
        raise NotImplementedError

    def on_start(self) -> None:
        pass

    def on_error(self, exc: BaseException) -> bool:
        """Log an uncaught exception; return True only if the plugin handled it."""
        self.context.log(exc)
        return False

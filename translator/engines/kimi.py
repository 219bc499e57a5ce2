"""Kimi (Moonshot) chat-completion translator."""
from __future__ import annotations

import logging
import threading
from typing import List, Optional

from config import ENGINE_NAME, MAX_RETRY_COUNT, RETRY_DELAY_SEC
from languages import SOURCE_LANGUAGES, TARGET_LANGUAGES, get_lang_display_name
from settings_manager import TranslatorSettings
from translator.base import (
    PluginContext,
    SoftError,
    TranslationEngine,
    TranslationRequest,
    TranslationResult,
)
from translator.chat_api import Transport, call_chat_completion, post_json
from translator.errors import RequestTimeoutError, TranslationError
from translator.prompt import build_chat_payload, build_translation_prompt, summarize_prompt

logger = logging.getLogger(__name__)


class KimiTranslationEngine(TranslationEngine):
    """
    Translates single strings through the Kimi chat-completion API.

    Settings are re-read from the host preferences at init, on every
    `on_start()` and at the top of every translation. Only timeouts are
    retried: up to MAX_RETRY_COUNT attempts, waiting attempt * RETRY_DELAY_SEC
    between them. The wait ends early if `interrupt_event` is set.

    The interrupt event belongs to the engine, not to a calling thread:
    `interrupt()` ends whichever retry wait observes it first, and the flag is
    cleared once that wait returns. Callers translating concurrently on one
    engine and needing per-thread interruption should give each thread its
    own engine.
    """

    def __init__(
        self,
        context: PluginContext,
        transport: Transport = post_json,
        interrupt_event: Optional[threading.Event] = None,
    ) -> None:
        super().__init__(context)
        self._transport = transport
        self._interrupt_event = interrupt_event or threading.Event()
        self.settings = TranslatorSettings()

    def init(self) -> None:
        self.load_settings()

    def load_settings(self) -> TranslatorSettings:
        self.settings = self.context.get_preferences().load_translator_settings()
        return self.settings

    def name(self) -> str:
        return ENGINE_NAME

    def load_source_languages(self) -> List[str]:
        return list(SOURCE_LANGUAGES)

    def load_target_languages(self, source_language: str) -> List[str]:
        # Every target is offered regardless of the source.
        return list(TARGET_LANGUAGES)

    def get_language_display_name(self, language: str) -> str:
        return get_lang_display_name(language)

    def translate_request(self, request: TranslationRequest) -> TranslationResult:
        text = request.text
        if text is None or not text.strip():
            return TranslationResult(translated_text=text)

        settings = self.load_settings()
        if not settings.has_api_key:
            return TranslationResult.soft(SoftError.MISSING_API_KEY)

        prompt = build_translation_prompt(
            text,
            request.src_lang,
            request.dst_lang,
            display_name=self.get_language_display_name,
        )
        payload = build_chat_payload(settings, prompt)
        logger.debug("Kimi request: %s", summarize_prompt(prompt, request.src_lang, request.dst_lang))

        attempt = 0
        while attempt < MAX_RETRY_COUNT:
            try:
                translated = call_chat_completion(payload, settings.api_key, transport=self._transport)
            except RequestTimeoutError as exc:
                attempt += 1
                logger.warning("Kimi request timed out (attempt %s/%s): %s", attempt, MAX_RETRY_COUNT, exc)
                if attempt < MAX_RETRY_COUNT and self._wait_before_retry(attempt):
                    return TranslationResult.soft(SoftError.INTERRUPTED)
            except TranslationError as exc:
                self.context.log(exc)
                raise
            except Exception as exc:  # noqa: BLE001
                self.context.log(exc)
                raise TranslationError(str(exc)) from exc
            else:
                return TranslationResult(translated_text=translated)

        return TranslationResult.soft(SoftError.TIMEOUT)

    def interrupt(self) -> None:
        """Abort a pending retry wait; an in-flight request still runs to completion."""
        self._interrupt_event.set()

    def on_start(self) -> None:
        self.load_settings()

    def _wait_before_retry(self, attempt: int) -> bool:
        """Sleep before the next attempt; return True if interrupted."""
        if self._interrupt_event.wait(RETRY_DELAY_SEC * attempt):
            self._interrupt_event.clear()
            return True
        return False

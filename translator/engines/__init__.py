"""Translator engine implementations exports."""
from translator.engines.kimi import KimiTranslationEngine

__all__ = [
    "KimiTranslationEngine",
]

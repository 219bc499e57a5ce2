"""Prompt and chat payload construction for LLM translation."""
from __future__ import annotations

from typing import Any, Callable, Dict, List

from languages import AUTO_DETECT, get_lang_display_name
from settings_manager import TranslatorSettings
from translator.base import ApiMessage

SYSTEM_INSTRUCTION = "你是一个专业的翻译助手，只返回翻译结果，不添加任何额外说明。"

# Used in place of a language name when the source is auto-detected.
GENERIC_SOURCE_NAME = "文本"

TRANSLATION_DIRECTIVES = (
    "只返回翻译结果，不要添加任何解释或说明",
    "保持原文的格式和特殊字符（如%s、%d等占位符）不变",
    "确保翻译准确、自然、流畅",
    "如果是代码或技术术语，请保持原样不翻译",
)


def build_translation_prompt(
    text: str,
    source_language: str,
    target_language: str,
    display_name: Callable[[str], str] = get_lang_display_name,
) -> str:
    """
    Build the user instruction for one translation.

    The input text is always appended last, after the numbered directives.
    """
    if source_language == AUTO_DETECT:
        source_name = GENERIC_SOURCE_NAME
    else:
        source_name = display_name(source_language)
    target_name = display_name(target_language)

    lines = [
        f"你是一个专业的翻译助手。请将以下{source_name}翻译成{target_name}。",
        "",
        "翻译要求：",
    ]
    lines.extend(f"{index}. {directive}" for index, directive in enumerate(TRANSLATION_DIRECTIVES, start=1))
    lines.extend(["", "待翻译文本：", text])
    return "\n".join(lines)


def build_messages(prompt: str) -> List[ApiMessage]:
    """Return the system instruction followed by the user prompt."""
    return [
        ApiMessage(role="system", content=SYSTEM_INSTRUCTION),
        ApiMessage(role="user", content=prompt),
    ]


def build_chat_payload(settings: TranslatorSettings, prompt: str) -> Dict[str, Any]:
    """Assemble the chat-completion request body."""
    return {
        "model": settings.model,
        "temperature": settings.temperature,
        "max_completion_tokens": settings.max_tokens,
        "messages": [message.to_dict() for message in build_messages(prompt)],
    }


def summarize_prompt(prompt: str, source_language: str, target_language: str) -> str:
    """Return a compact string useful for logging prompt contents."""
    return f"prompt_len={len(prompt)}, src={source_language}, dst={target_language}"

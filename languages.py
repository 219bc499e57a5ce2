"""Language table shared by the translation engine, prompts and the CLI."""
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

# Sentinel source code meaning "detect the source language".
AUTO_DETECT = "auto"


@dataclass(frozen=True)
class Language:
    code: str
    name: str
    english_name: str


# Display names are in the host UI language.
_LANGUAGE_ROWS = (
    ("auto", "自动检测", "Auto detect"),
    ("zh", "中文", "Chinese"),
    ("en", "英语", "English"),
    ("ja", "日语", "Japanese"),
    ("ko", "韩语", "Korean"),
    ("fr", "法语", "French"),
    ("de", "德语", "German"),
    ("es", "西班牙语", "Spanish"),
    ("ru", "俄语", "Russian"),
    ("it", "意大利语", "Italian"),
    ("pt", "葡萄牙语", "Portuguese"),
    ("ar", "阿拉伯语", "Arabic"),
    ("th", "泰语", "Thai"),
    ("vi", "越南语", "Vietnamese"),
    ("id", "印尼语", "Indonesian"),
    ("ms", "马来语", "Malay"),
    ("tr", "土耳其语", "Turkish"),
    ("pl", "波兰语", "Polish"),
    ("nl", "荷兰语", "Dutch"),
    ("sv", "瑞典语", "Swedish"),
    ("cs", "捷克语", "Czech"),
)

LANGUAGES: Mapping[str, Language] = MappingProxyType(
    {code: Language(code=code, name=name, english_name=english) for code, name, english in _LANGUAGE_ROWS}
)

SOURCE_LANGUAGES: tuple[str, ...] = tuple(code for code, _, _ in _LANGUAGE_ROWS)
TARGET_LANGUAGES: tuple[str, ...] = tuple(code for code in SOURCE_LANGUAGES if code != AUTO_DETECT)


def get_lang_display_name(code: str) -> str:
    """Return the display name for a language code, or the code itself if unknown."""
    language = LANGUAGES.get(code)
    if language is not None:
        return language.name
    return code

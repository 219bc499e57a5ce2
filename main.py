"""Command-line harness that drives the translation plugin like a host would."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from config import APP_NAME, APP_VERSION, DEFAULT_DST_LANG, DEFAULT_SRC_LANG, setup_logging
from languages import LANGUAGES, SOURCE_LANGUAGES, TARGET_LANGUAGES
from settings_manager import SettingsStore
from translator import KimiTranslationEngine, PluginContext, TranslationError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="kimi-translate", description=APP_NAME)
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    parser.add_argument("--config", type=Path, default=None, help="path to the YAML settings file")
    subparsers = parser.add_subparsers(dest="command", required=True)

    translate = subparsers.add_parser("translate", help="translate a piece of text")
    translate.add_argument("text")
    translate.add_argument("--source", default=DEFAULT_SRC_LANG, choices=SOURCE_LANGUAGES)
    translate.add_argument("--target", default=DEFAULT_DST_LANG, choices=TARGET_LANGUAGES)

    subparsers.add_parser("languages", help="list selectable languages")

    configure = subparsers.add_parser("configure", help="store translator settings")
    configure.add_argument("--api-key")
    configure.add_argument("--model")
    configure.add_argument("--max-tokens", type=int)
    configure.add_argument("--temperature", type=float)
    return parser


def create_engine(store: SettingsStore) -> KimiTranslationEngine:
    """Build and initialize the engine the way the host does on plugin load."""
    engine = KimiTranslationEngine(PluginContext(store))
    engine.initialize()
    return engine


def _run_translate(engine: KimiTranslationEngine, args: argparse.Namespace) -> int:
    engine.on_start()
    try:
        result = engine.translate(args.text, args.source, args.target)
    except TranslationError as exc:
        engine.on_error(exc)
        print(f"{engine.name()}: {exc}", file=sys.stderr)
        return 1
    print(result)
    return 0


def _run_languages(engine: KimiTranslationEngine) -> int:
    print("Source languages:")
    for code in engine.load_source_languages():
        print(f"  {code:<5} {engine.get_language_display_name(code)} ({LANGUAGES[code].english_name})")
    print("Target languages:")
    for code in engine.load_target_languages(DEFAULT_SRC_LANG):
        print(f"  {code:<5} {engine.get_language_display_name(code)} ({LANGUAGES[code].english_name})")
    return 0


def _run_configure(store: SettingsStore, args: argparse.Namespace) -> int:
    store.update_translator(
        api_key=args.api_key,
        model=args.model,
        max_tokens=args.max_tokens,
        temperature=args.temperature,
    )
    snapshot = store.load_translator_settings()
    print(f"Saved settings to {store.path}")
    print(f"  model={snapshot.model} max_tokens={snapshot.max_tokens} temperature={snapshot.temperature}")
    print(f"  api_key={'set' if snapshot.has_api_key else 'not set'}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(logging.DEBUG if args.verbose else logging.WARNING)

    store = SettingsStore(args.config)
    if args.command == "configure":
        return _run_configure(store, args)

    engine = create_engine(store)
    if args.command == "languages":
        return _run_languages(engine)
    return _run_translate(engine, args)


if __name__ == "__main__":
    raise SystemExit(main())

"""Command line interface for browsing a story catalog."""
from __future__ import annotations

import argparse
import json
import logging
import logging.config
import os
from pathlib import Path
from typing import List, Optional

from storyhub import ClientApi, Settings, create_default_api
from storyhub.settings import load_environment

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    """Configure logging from an INI file or fall back to basic configuration."""

    config_candidates = []
    if config_env := os.getenv("LOGGING_CONFIG"):
        config_candidates.append(Path(config_env))
    config_candidates.append(Path("logging.ini"))

    for config_path in config_candidates:
        if not config_path.exists():
            continue
        if config_path.suffix.lower() not in {".ini", ".cfg"}:
            print(f"Skipping unsupported logging config {config_path}.")
            continue
        logging.config.fileConfig(config_path, disable_existing_loggers=False)
        return

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def command_kinds(api: ClientApi, _: argparse.Namespace) -> None:
    for entry in api.get_storybook():
        print(f"{entry.kind} ({entry.file_name or 'unknown file'})")
        for story in entry.stories:
            print(f"  - {story.name}")


def command_render(api: ClientApi, args: argparse.Namespace) -> None:
    if not api.story_store.has_story(args.kind, args.story):
        print(f"Error: story '{args.story}' of kind '{args.kind}' is not registered")
        raise SystemExit(2)
    render = api.story_store.get_story_with_context(args.kind, args.story)
    print(render())


def command_extract(api: ClientApi, _: argparse.Namespace) -> None:
    print(json.dumps(api.story_store.extract(), indent=2, default=str))


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Inspect the registered story catalog.")
    subparsers = parser.add_subparsers(dest="command")
    subparsers.required = True

    parser_kinds = subparsers.add_parser("kinds", help="List kinds and their stories")
    parser_kinds.set_defaults(func=command_kinds)

    parser_render = subparsers.add_parser("render", help="Render a single story")
    parser_render.add_argument("kind", help="Kind the story belongs to")
    parser_render.add_argument("story", help="Name of the story")
    parser_render.set_defaults(func=command_render)

    parser_extract = subparsers.add_parser("extract", help="Print the story index as JSON")
    parser_extract.set_defaults(func=command_extract)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    load_environment()
    settings = Settings.load()
    configure_logging(settings)
    api, loader = create_default_api(settings)
    logger.debug("Loaded %d story module(s)", len(loader.modules()))
    args.func(api, args)
    return 0


if __name__ == "__main__":  # pragma: no cover - entry point for CLI usage
    raise SystemExit(main())

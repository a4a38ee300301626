"""Helper functions for extract_articles CLI."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from common.cli_helpers import add_config_argument

logger = logging.getLogger(__name__)

EXPORT_SUFFIXES = ("htm", "HTML")


def discover_collections(input_dir: Path) -> list[Path]:
    '''Return the collection subdirectories of the input root, sorted by name.'''

    if not input_dir.is_dir():
        raise FileNotFoundError(f"Input directory not found: {input_dir}")

    collections = sorted(p for p in input_dir.iterdir() if p.is_dir())
    skipped = [p.name for p in input_dir.iterdir() if not p.is_dir()]
    if skipped:
        logger.debug("Ignoring files at input root: %s", ", ".join(sorted(skipped)))
    return collections


def discover_export_files(collection_dir: Path) -> list[Path]:
    '''Return the export files (names ending in htm or HTML) of one collection.'''

    return sorted(
        p for p in collection_dir.iterdir()
        if p.is_file() and p.name.endswith(EXPORT_SUFFIXES)
    )


def parse_extract_articles_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for extract_articles.'''

    parser = argparse.ArgumentParser(description="Extract articles from LexisNexis HTML exports")
    add_config_argument(parser)
    parser.add_argument("--input-dir", type=Path, default=None, help="Override the configured input root")
    parser.add_argument("--load-local", action="store_true", help="Save extracted articles as JSONL")
    parser.add_argument("--output-dir", default="output", help="Directory for --load-local (default: output)")
    return parser.parse_args(argv)

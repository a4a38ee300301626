"""Helper functions for count_terms CLI."""

from __future__ import annotations

import argparse
from dataclasses import replace
from functools import partial
from pathlib import Path

from common.cli_helpers import add_config_argument, parse_date
from common.errors import ConfigError
from count_terms.config_loader import RunConfig
from count_terms.models import DateWindow


def parse_count_terms_args(argv: list[str] | None = None) -> argparse.Namespace:
    '''Parse CLI arguments for count_terms.'''

    parser = argparse.ArgumentParser(description="Count terms in LexisNexis HTML exports")
    add_config_argument(parser)
    parser.add_argument("--input-dir", type=Path, default=None, help="Override the configured input root")
    parser.add_argument("--output-dir", type=Path, default=None, help="Override the configured output root")
    parser.add_argument(
        "--headlines",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Write headlines of articles mentioning the headline term",
    )
    parser.add_argument("--headline-term", default=None, help="Term for headline mode")
    parser.add_argument(
        "--window-start",
        type=partial(parse_date, field_name="window-start"),
        default=None,
        help="Replace configured windows with one window (YYYY-MM-DD, exclusive)",
    )
    parser.add_argument(
        "--window-end",
        type=partial(parse_date, field_name="window-end"),
        default=None,
        help="End of the replacement window (YYYY-MM-DD, exclusive)",
    )
    return parser.parse_args(argv)


def apply_overrides(config: RunConfig, args: argparse.Namespace) -> RunConfig:
    '''Apply CLI overrides on top of a loaded config.'''

    changes = {}
    if args.input_dir is not None:
        changes["input_dir"] = args.input_dir
    if args.output_dir is not None:
        changes["output_dir"] = args.output_dir

    if (args.window_start is None) != (args.window_end is None):
        raise ConfigError("--window-start and --window-end must be given together")
    if args.window_start is not None:
        try:
            changes["date_windows"] = (DateWindow(start=args.window_start, end=args.window_end),)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    headlines = config.headlines
    if args.headlines is not None:
        headlines = replace(headlines, enabled=args.headlines)
    if args.headline_term:
        headlines = replace(headlines, term=args.headline_term)
    if headlines is not config.headlines:
        changes["headlines"] = headlines

    return replace(config, **changes) if changes else config

"""CLI for counting terms in LexisNexis HTML exports."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.errors import ConfigError
from count_terms.config_loader import load_config
from count_terms.helpers import apply_overrides, parse_count_terms_args
from count_terms.run import run

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_count_terms_args(argv)
    setup_logging()
    load_dotenv()

    # Bad configuration makes every report meaningless, so stop before any file
    try:
        config = apply_overrides(load_config(args.config), args)
        reports = run(config)
    except (FileNotFoundError, ConfigError) as e:
        logger.error("%s", e)
        raise SystemExit(1) from e

    if not reports:
        logger.warning("No reports written")
        return
    logger.info("Done: %d reports under %s", len(reports), config.output_dir)


if __name__ == "__main__":
    main()

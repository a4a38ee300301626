"""CLI for extracting articles from LexisNexis HTML exports."""

from __future__ import annotations

import logging

from dotenv import load_dotenv

from common.cli_helpers import setup_logging
from common.errors import ConfigError
from common.local_io import save_jsonl_records_local
from count_terms.config_loader import load_config
from extract_articles.extract_articles import extract_articles_from_file
from extract_articles.helpers import (
    discover_collections,
    discover_export_files,
    parse_extract_articles_args,
)
from extract_articles.node_stream import FILE_ERRORS

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> None:
    args = parse_extract_articles_args(argv)
    setup_logging()
    load_dotenv()

    try:
        config = load_config(args.config)
        input_dir = args.input_dir or config.input_dir
        collections = discover_collections(input_dir)
    except (FileNotFoundError, ConfigError) as e:
        logger.error("%s", e)
        raise SystemExit(1) from e

    detector = config.build_detector()
    total = 0
    for collection in collections:
        records = []
        for path in discover_export_files(collection):
            try:
                file_records = list(extract_articles_from_file(path, detector))
            except FILE_ERRORS as e:
                logger.warning("Skipping unreadable file %s: %s", path, e)
                continue
            logger.info("%s: %d articles", path.name, len(file_records))
            records.extend(file_records)

        logger.info("Extracted %d articles from %s", len(records), collection.name)
        total += len(records)
        if args.load_local and records:
            save_jsonl_records_local(
                records,
                prefix=f"extracted_articles_{collection.name}",
                output_dir=args.output_dir,
            )

    if not total:
        logger.warning("No articles extracted")
        return
    logger.info("Done: %d articles from %d collections", total, len(collections))


if __name__ == "__main__":
    main()

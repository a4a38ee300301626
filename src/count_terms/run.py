"""Count configured terms over every date window and input collection."""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from count_terms.aggregate import Accumulator
from count_terms.config_loader import HeadlineConfig, RunConfig
from count_terms.count_terms import count_term, count_terms
from count_terms.headlines import HeadlineCollector
from count_terms.models import DateWindow, TermGroup
from count_terms.report import write_counts_report, write_headlines_report
from extract_articles.boundary import BoundaryDetector
from extract_articles.extract_articles import extract_articles_from_file
from extract_articles.helpers import discover_collections, discover_export_files
from extract_articles.node_stream import FILE_ERRORS

logger = logging.getLogger(__name__)


@dataclass
class FileCounts:
    """Partial results of one export file."""
    accumulator: Accumulator
    headlines: Optional[HeadlineCollector]
    articles_found: int = 0
    articles_in_window: int = 0


def _new_collector(headlines: Optional[HeadlineConfig]) -> Optional[HeadlineCollector]:
    if headlines is None or not headlines.enabled:
        return None
    return HeadlineCollector(headlines.term_definition, headlines.weekday)


def count_file(
    path: Path,
    detector: BoundaryDetector,
    groups: tuple[TermGroup, ...],
    window: DateWindow,
    headlines: Optional[HeadlineConfig] = None,
) -> FileCounts:
    """Extract one file's articles and count terms in those inside the window.

    Raises:
        OSError, lxml.etree.LxmlError: If the file cannot be read or parsed.
            Nothing from the file has been counted at that point.
    """
    result = FileCounts(accumulator=Accumulator(), headlines=_new_collector(headlines))
    for record in extract_articles_from_file(path, detector):
        result.articles_found += 1
        if not window.contains(record.date):
            continue
        result.articles_in_window += 1
        result.accumulator.add_article(record, count_terms(groups, record.body))
        if result.headlines is not None:
            result.headlines.add(record, count_term(result.headlines.term, record.body))
    return result


def count_collection(
    collection_dir: Path,
    detector: BoundaryDetector,
    groups: tuple[TermGroup, ...],
    window: DateWindow,
    headlines: Optional[HeadlineConfig] = None,
) -> tuple[Accumulator, Optional[HeadlineCollector]]:
    """Merge the counts of every export file in one collection directory."""
    running = Accumulator()
    collector = _new_collector(headlines)

    files = discover_export_files(collection_dir)
    logger.info("Processing %d files in %s", len(files), collection_dir.name)
    for path in files:
        try:
            partial = count_file(path, detector, groups, window, headlines)
        except FILE_ERRORS as e:
            logger.warning("Skipping unreadable file %s: %s", path, e)
            continue
        logger.info(
            "%s: %d articles, %d in window",
            path.name, partial.articles_found, partial.articles_in_window,
        )
        running.merge(partial.accumulator)
        if collector is not None and partial.headlines is not None:
            collector.merge(partial.headlines)
    return running, collector


def headlines_filename(collection: str, term: str) -> str:
    safe_term = re.sub(r"[^\w-]+", "_", term).strip("_")
    return f"{collection}_headlines_{safe_term}.csv"


def run(config: RunConfig) -> list[Path]:
    """Write the reports for every (date window, collection) pair.

    Returns:
        Paths of the written report files.
    """
    detector = config.build_detector()
    groups = config.counted_groups
    collections = discover_collections(config.input_dir)
    if not collections:
        logger.warning("No collections found in %s", config.input_dir)
        return []

    written = []
    for window in config.date_windows:
        output_dir = config.output_dir / window.name
        for collection in collections:
            logger.info("Counting %s between %s and %s", collection.name, window.start, window.end)
            accumulator, collector = count_collection(
                collection, detector, groups, window, config.headlines
            )
            written.append(
                write_counts_report(output_dir / f"{collection.name}_counts.csv", groups, accumulator)
            )
            if collector is not None:
                written.append(
                    write_headlines_report(
                        output_dir / headlines_filename(collection.name, config.headlines.term),
                        collector.entries(),
                    )
                )
            accumulator.log_publication_counts(collection.name)

    logger.info("Wrote %d reports to %s", len(written), config.output_dir)
    return written

"""Write term count and headline reports as CSV."""

import csv
import logging
from pathlib import Path
from typing import Iterable

from count_terms.aggregate import Accumulator
from count_terms.models import REPORTED_WEEKDAYS, HeadlineEntry, TermGroup, iter_terms, term_key

logger = logging.getLogger(__name__)

HEADLINES_HEADER = "Date, Section, Length, Title"


def counts_header() -> list[str]:
    header = ["Term Type", "Term", "Total Term Count", "Total Article Count"]
    header += [f"Term Count On {day.display_name}" for day in REPORTED_WEEKDAYS]
    header += [f"Article Count On {day.display_name}" for day in REPORTED_WEEKDAYS]
    return header


def counts_rows(groups: tuple[TermGroup, ...], accumulator: Accumulator) -> list[list]:
    """One row per term in group order; Sunday is left out."""
    rows = []
    for group, term in iter_terms(groups):
        key = term_key(group, term)
        term_by_day = accumulator.term_counts_by_day.get(key, {})
        article_by_day = accumulator.article_counts_by_day.get(key, {})
        row = [
            group.label,
            term.label,
            accumulator.term_counts.get(key, 0),
            accumulator.article_counts.get(key, 0),
        ]
        row += [term_by_day.get(day, 0) for day in REPORTED_WEEKDAYS]
        row += [article_by_day.get(day, 0) for day in REPORTED_WEEKDAYS]
        rows.append(row)
    return rows


def write_counts_report(path: Path, groups: tuple[TermGroup, ...], accumulator: Accumulator) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(counts_header())
        writer.writerows(counts_rows(groups, accumulator))
    logger.info("Wrote counts for %d articles to %s", accumulator.article_total, path)
    return path


def write_headlines_report(path: Path, entries: Iterable[HeadlineEntry]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    count = 0
    with path.open("w", newline="", encoding="utf-8") as f:
        f.write(HEADLINES_HEADER + "\n")
        writer = csv.writer(f, lineterminator="\n")
        for entry in entries:
            writer.writerow([entry.date.isoformat(), entry.section, entry.length, entry.title])
            count += 1
    logger.info("Wrote %d headlines to %s", count, path)
    return path

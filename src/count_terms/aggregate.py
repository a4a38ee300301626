"""Accumulate term, weekday and publication counts across files."""

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Hashable, Mapping, MutableMapping

from count_terms.models import Weekday, TermKey
from extract_articles.models import ArticleRecord, PublicationFormat

logger = logging.getLogger(__name__)


def merge_counts(partial: Mapping[Hashable, int], running: MutableMapping[Hashable, int]) -> None:
    """Add every count in ``partial`` to ``running``; missing keys start at zero."""
    for key, value in partial.items():
        running[key] = running.get(key, 0) + value


def merge_nested_counts(
    partial: Mapping[Hashable, Mapping[Hashable, int]],
    running: MutableMapping[Hashable, Counter],
) -> None:
    for key, counts in partial.items():
        merge_counts(counts, running.setdefault(key, Counter()))


@dataclass
class Accumulator:
    """Running totals for one date window and one input collection."""
    term_counts: Counter = field(default_factory=Counter)
    article_counts: Counter = field(default_factory=Counter)
    term_counts_by_day: dict[TermKey, Counter] = field(default_factory=dict)
    article_counts_by_day: dict[TermKey, Counter] = field(default_factory=dict)
    publication_counts: Counter = field(default_factory=Counter)
    publication_counts_by_day: dict[PublicationFormat, Counter] = field(default_factory=dict)

    def add_article(self, record: ArticleRecord, term_counts: Mapping[TermKey, int]) -> None:
        """Record one in-window article and its per-term counts."""
        day = Weekday.of(record.date)
        self.publication_counts[record.publication] += 1
        self.publication_counts_by_day.setdefault(record.publication, Counter())[day] += 1

        for key, count in term_counts.items():
            self.term_counts_by_day.setdefault(key, Counter())[day] += count
            if count > 0:
                self.term_counts[key] += count
                self.article_counts[key] += 1
                self.article_counts_by_day.setdefault(key, Counter())[day] += 1

    def merge(self, partial: "Accumulator") -> None:
        """Fold another accumulator's counts into this one."""
        merge_counts(partial.term_counts, self.term_counts)
        merge_counts(partial.article_counts, self.article_counts)
        merge_nested_counts(partial.term_counts_by_day, self.term_counts_by_day)
        merge_nested_counts(partial.article_counts_by_day, self.article_counts_by_day)
        merge_counts(partial.publication_counts, self.publication_counts)
        merge_nested_counts(partial.publication_counts_by_day, self.publication_counts_by_day)

    @property
    def article_total(self) -> int:
        return sum(self.publication_counts.values())

    def log_publication_counts(self, name: str) -> None:
        for publication in sorted(self.publication_counts, key=lambda p: p.value):
            count = self.publication_counts[publication]
            logger.info("%s: %s article count %d", name, publication.value, count)
            by_day = self.publication_counts_by_day.get(publication, Counter())
            for day in Weekday:
                logger.info(
                    "%s: %s article count on %s %d",
                    name, publication.value, day.display_name, by_day[day],
                )

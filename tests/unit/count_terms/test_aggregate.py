"""Tests for count_terms.aggregate module."""

import logging
from collections import Counter
from datetime import date

from count_terms.aggregate import Accumulator, merge_counts, merge_nested_counts
from count_terms.models import Weekday
from extract_articles.models import ArticleRecord, PublicationFormat

REFUGEE = ("Key Terms", "refugee")
SYRIA = ("Key Terms", "Syria ")


def _record(day: date, publication=PublicationFormat.THE_GUARDIAN) -> ArticleRecord:
    return ArticleRecord(
        publication=publication,
        date=day,
        section="World news",
        length="500 words",
        title="Title",
        body=" body ",
    )


# Saturday, Monday and Wednesday
SAT = date(2015, 9, 5)
MON = date(2015, 9, 7)
WED = date(2015, 9, 9)


def _accumulate(articles) -> Accumulator:
    accumulator = Accumulator()
    for record, counts in articles:
        accumulator.add_article(record, counts)
    return accumulator


def _snapshot(accumulator: Accumulator) -> tuple:
    return (
        accumulator.term_counts,
        accumulator.article_counts,
        accumulator.term_counts_by_day,
        accumulator.article_counts_by_day,
        accumulator.publication_counts,
        accumulator.publication_counts_by_day,
    )


ARTICLES_A = [
    (_record(SAT), {REFUGEE: 3, SYRIA: 0}),
    (_record(MON, PublicationFormat.THE_EXPRESS), {REFUGEE: 1, SYRIA: 2}),
]
ARTICLES_B = [
    (_record(SAT, PublicationFormat.THE_EXPRESS), {REFUGEE: 0, SYRIA: 1}),
]
ARTICLES_C = [
    (_record(WED), {REFUGEE: 2, SYRIA: 0}),
    (_record(WED), {REFUGEE: 0, SYRIA: 0}),
]


class TestMergeCounts:
    def test_missing_keys_start_at_zero(self) -> None:
        running = {"a": 1}
        merge_counts({"a": 2, "b": 3}, running)
        assert running == {"a": 3, "b": 3}

    def test_nested(self) -> None:
        running = {"x": Counter({Weekday.MONDAY: 1})}
        merge_nested_counts({"x": {Weekday.MONDAY: 2}, "y": {Weekday.FRIDAY: 1}}, running)
        assert running == {
            "x": Counter({Weekday.MONDAY: 3}),
            "y": Counter({Weekday.FRIDAY: 1}),
        }


class TestAccumulator:
    def test_add_article_counts(self) -> None:
        accumulator = _accumulate(ARTICLES_A)

        assert accumulator.term_counts[REFUGEE] == 4
        assert accumulator.term_counts[SYRIA] == 2
        assert accumulator.article_counts[REFUGEE] == 2
        assert accumulator.article_counts[SYRIA] == 1
        assert accumulator.term_counts_by_day[REFUGEE] == Counter({Weekday.SATURDAY: 3, Weekday.MONDAY: 1})
        assert accumulator.article_counts_by_day[SYRIA] == Counter({Weekday.MONDAY: 1})
        assert accumulator.publication_counts == Counter({
            PublicationFormat.THE_GUARDIAN: 1,
            PublicationFormat.THE_EXPRESS: 1,
        })
        assert accumulator.publication_counts_by_day[PublicationFormat.THE_EXPRESS] == Counter({Weekday.MONDAY: 1})
        assert accumulator.article_total == 2

    def test_article_without_mentions_counts_for_publication_only(self) -> None:
        accumulator = _accumulate([(_record(WED), {REFUGEE: 0})])
        assert accumulator.term_counts[REFUGEE] == 0
        assert accumulator.article_counts[REFUGEE] == 0
        assert accumulator.publication_counts[PublicationFormat.THE_GUARDIAN] == 1

    def test_merge_equals_processing_concatenation(self) -> None:
        running = Accumulator()
        for articles in (ARTICLES_A, ARTICLES_B, ARTICLES_C):
            running.merge(_accumulate(articles))

        assert _snapshot(running) == _snapshot(_accumulate(ARTICLES_A + ARTICLES_B + ARTICLES_C))

    def test_merge_is_associative(self) -> None:
        left = _accumulate(ARTICLES_A)
        left.merge(_accumulate(ARTICLES_B))
        left.merge(_accumulate(ARTICLES_C))

        right_tail = _accumulate(ARTICLES_B)
        right_tail.merge(_accumulate(ARTICLES_C))
        right = _accumulate(ARTICLES_A)
        right.merge(right_tail)

        assert _snapshot(left) == _snapshot(right)

    def test_merge_is_commutative(self) -> None:
        first = _accumulate(ARTICLES_A)
        first.merge(_accumulate(ARTICLES_C))
        second = _accumulate(ARTICLES_C)
        second.merge(_accumulate(ARTICLES_A))
        assert _snapshot(first) == _snapshot(second)

    def test_merge_empty_partial_changes_nothing(self) -> None:
        running = _accumulate(ARTICLES_A)
        running.merge(Accumulator())
        assert _snapshot(running) == _snapshot(_accumulate(ARTICLES_A))

    def test_log_publication_counts(self, caplog) -> None:
        accumulator = _accumulate(ARTICLES_A)
        with caplog.at_level(logging.INFO, logger="count_terms.aggregate"):
            accumulator.log_publication_counts("guardian")
        assert "guardian: The Guardian article count 1" in caplog.text
        assert "guardian: The Express article count on Monday 1" in caplog.text
        assert "guardian: The Express article count on Sunday 0" in caplog.text

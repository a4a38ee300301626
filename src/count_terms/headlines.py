"""Collect headlines of articles that mention a chosen term."""

from count_terms.models import HeadlineEntry, TermDefinition, Weekday
from extract_articles.models import ArticleRecord


class HeadlineCollector:
    """Keep (date, section, length, title) of matching articles on one weekday."""

    def __init__(self, term: TermDefinition, weekday: Weekday = Weekday.SATURDAY):
        self.term = term
        self.weekday = weekday
        self._entries: set[HeadlineEntry] = set()

    def add(self, record: ArticleRecord, term_count: int) -> bool:
        """Store the article's outline if it mentions the term on the weekday."""
        if term_count <= 0 or Weekday.of(record.date) is not self.weekday:
            return False
        self._entries.add(
            HeadlineEntry(
                date=record.date,
                section=record.section,
                length=record.length,
                title=record.title,
            )
        )
        return True

    def merge(self, other: "HeadlineCollector") -> None:
        self._entries |= other._entries

    def entries(self) -> list[HeadlineEntry]:
        return sorted(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

"""Data models for count_terms pipeline stage."""

import calendar
from dataclasses import dataclass, field
from datetime import date
from enum import IntEnum
from typing import Iterator

OR_SEPARATOR = " OR "


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def of(cls, d: date) -> "Weekday":
        return cls(d.weekday())

    @classmethod
    def parse(cls, value: str) -> "Weekday":
        try:
            return cls[value.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown weekday: {value!r}") from None

    @property
    def display_name(self) -> str:
        return calendar.day_name[self.value]


REPORTED_WEEKDAYS = tuple(day for day in Weekday if day is not Weekday.SUNDAY)


@dataclass(frozen=True)
class TermDefinition:
    """A counted term: one label for any of several literal alternatives."""
    label: str
    alternatives: tuple[str, ...]

    @classmethod
    def parse(cls, value: str) -> "TermDefinition":
        """Build a term from ``"a OR b"`` notation; the whole string is the label."""
        return cls(label=value, alternatives=tuple(value.split(OR_SEPARATOR)))


@dataclass(frozen=True)
class TermGroup:
    """A report category holding terms in report order."""
    label: str
    terms: tuple[TermDefinition, ...]


TermKey = tuple[str, str]


def term_key(group: TermGroup, term: TermDefinition) -> TermKey:
    return (group.label, term.label)


def iter_terms(groups: tuple[TermGroup, ...]) -> Iterator[tuple[TermGroup, TermDefinition]]:
    for group in groups:
        for term in group.terms:
            yield group, term


@dataclass(frozen=True)
class DateWindow:
    """Date range whose start and end dates are both excluded."""
    start: date
    end: date

    def __post_init__(self) -> None:
        if self.end <= self.start:
            raise ValueError(f"Date window end {self.end} must be after start {self.start}")

    def contains(self, d: date) -> bool:
        return self.start < d < self.end

    @property
    def name(self) -> str:
        return f"{self.start.isoformat()}_{self.end.isoformat()}"


@dataclass(frozen=True, order=True)
class HeadlineEntry:
    """Date and outline of an article, ordered by date then outline text."""
    sort_key: tuple[date, str] = field(init=False, repr=False, compare=True)
    date: date = field(compare=False)
    section: str = field(compare=False)
    length: str = field(compare=False)
    title: str = field(compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "sort_key", (self.date, self.section + self.length + self.title))

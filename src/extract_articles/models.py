"""Data models for extract_articles pipeline stage."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

TEXT_KEY = "#text"


@dataclass(frozen=True)
class Node:
    """One markup element or text fragment, in document order.

    Text fragments use the tag ``#text`` and carry a single ``#text``
    attribute holding their content, so the extractor can inspect every node
    through its attribute values.
    """
    tag: str
    attributes: tuple[tuple[str, str], ...] = ()
    text: Optional[str] = None

    @classmethod
    def text_fragment(cls, text: str) -> "Node":
        return cls(tag=TEXT_KEY, attributes=((TEXT_KEY, text),), text=text)

    @property
    def is_text(self) -> bool:
        return self.tag == TEXT_KEY

    def attribute_values(self) -> list[str]:
        return [value for _, value in self.attributes]


class PublicationFormat(Enum):
    """Known publications and the format quirks of their exports."""

    THE_EXPRESS = "The Express"
    THE_GUARDIAN = "The Guardian"
    DAILY_MAIL = "DAILY MAIL (London)"
    MAIL_ON_SUNDAY = "MAIL ON SUNDAY (London)"
    DAILY_MIRROR = "Daily Mirror"
    THE_DAILY_TELEGRAPH = "The Daily Telegraph (London)"
    BIRMINGHAM_EVENING_MAIL = "Birmingham Evening Mail"
    MANCHESTER_EVENING_NEWS = "Manchester Evening News"
    THE_EVENING_STANDARD = "The Evening Standard (London)"

    @classmethod
    def from_name(cls, name: str) -> "PublicationFormat":
        """Look up a publication by export name or member name, ignoring case."""
        wanted = name.strip().lower()
        for fmt in cls:
            if wanted in (fmt.value.lower(), fmt.name.lower()):
                return fmt
        raise ValueError(
            f"Unknown publication: {name!r}. Known: {', '.join(f.value for f in cls)}"
        )

    @property
    def date_terminator(self) -> str:
        # Guardian dates carry a time stamp after the weekday
        if self is PublicationFormat.THE_GUARDIAN:
            return "GMT"
        return "day"

    @property
    def has_section_marker(self) -> bool:
        return self not in (PublicationFormat.DAILY_MAIL, PublicationFormat.MAIL_ON_SUNDAY)


@dataclass(frozen=True)
class ArticleRecord:
    """An article reassembled from the fragments of an export file."""
    publication: PublicationFormat
    date: date
    section: str
    length: str
    title: str
    body: str = field(repr=False)

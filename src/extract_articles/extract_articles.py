"""Reassemble articles from the node stream of an export file.

Exports tag their fields inconsistently, so fields are found by matching
content: a publication name opens an article, the date runs until a weekday
(or GMT time stamp), the title sits between ``c7`` and ``c6`` class markers,
``SECTION: `` and ``LENGTH: `` labels precede single fragments, and the body
runs until ``LOAD-DATE: ``.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, Optional

from common.errors import DateParseError, MarkerNotFoundError
from extract_articles.boundary import BoundaryDetector
from extract_articles.dates import parse_article_date
from extract_articles.models import TEXT_KEY, ArticleRecord, Node, PublicationFormat
from extract_articles.node_stream import iter_file_nodes

logger = logging.getLogger(__name__)

TITLE_START = "c7"
TITLE_END = "c6"
SECTION_LABEL = "SECTION: "
LENGTH_LABEL = "LENGTH: "
BODY_END_LABEL = "LOAD-DATE: "

_QUOTES_RE = re.compile("['\"‘’“”]")
_PUNCTUATION_RE = re.compile(r"([.?!,;:])")
_SPACES_RE = re.compile(r" {2,}")


class Phase(Enum):
    SEEKING = "boundary"
    DATE = "date"
    TITLE = "title"
    SECTION = "section"
    LENGTH = "length"
    BODY = "body"


def collapse_spaces(text: str) -> str:
    """Replace every run of spaces with a single space."""
    return _SPACES_RE.sub(" ", text)


def clean_body_fragment(text: str) -> str:
    """Blank out quote characters and put a space before punctuation."""
    text = _QUOTES_RE.sub(" ", text)
    return _PUNCTUATION_RE.sub(r" \1", text)


def _matches(value: str, marker: str) -> bool:
    return value.lower() == marker.lower()


@dataclass
class ExtractionContext:
    """Buffers for the single article currently being reassembled."""
    publication: PublicationFormat
    phase: Phase = Phase.DATE
    date: str = ""
    title_started: bool = False
    title: str = ""
    section_started: bool = False
    section: str = ""
    length_started: bool = False
    length: str = ""
    # Leading space lets space-padded terms match the first word
    body: str = " "


class ArticleExtractor:
    """Feed nodes one at a time; get an ArticleRecord back when one completes."""

    def __init__(self, detector: BoundaryDetector):
        self.detector = detector
        self.context: Optional[ExtractionContext] = None

    @property
    def phase(self) -> Phase:
        return self.context.phase if self.context else Phase.SEEKING

    def feed(self, node: Node) -> Optional[ArticleRecord]:
        """Consume one node.

        Returns:
            The completed ArticleRecord when this node ends an article body,
            otherwise None.

        Raises:
            DateParseError: If a completed article has an unreadable date. The
                article is discarded and the extractor goes back to seeking.
        """
        ctx = self.context
        if ctx is None:
            publication = self.detector.detect(node)
            if publication is not None:
                self.context = ExtractionContext(publication=publication)
            return None

        if ctx.phase is Phase.DATE:
            self._feed_date(ctx, node)
        elif ctx.phase is Phase.TITLE:
            self._feed_title(ctx, node)
        elif ctx.phase is Phase.SECTION:
            self._feed_section(ctx, node)
        elif ctx.phase is Phase.LENGTH:
            self._feed_length(ctx, node)
        elif self._feed_body(ctx, node):
            self.context = None
            return self._build_record(ctx)
        return None

    def close(self) -> None:
        """Finish the current document.

        Raises:
            MarkerNotFoundError: If an article was still in progress. It is
                discarded either way.
        """
        ctx, self.context = self.context, None
        if ctx is not None:
            raise MarkerNotFoundError(ctx.phase.value, ctx.publication.value)

    def _feed_date(self, ctx: ExtractionContext, node: Node) -> None:
        if not node.is_text or not node.text or node.text == "\n":
            return
        ctx.date += node.text
        if node.text.endswith(ctx.publication.date_terminator):
            ctx.phase = Phase.TITLE

    def _feed_title(self, ctx: ExtractionContext, node: Node) -> None:
        for key, value in node.attributes:
            if not ctx.title_started:
                ctx.title_started = _matches(value, TITLE_START)
                continue
            if _matches(value, TITLE_END):
                ctx.title = collapse_spaces(ctx.title).strip()
                ctx.phase = Phase.SECTION if ctx.publication.has_section_marker else Phase.LENGTH
                return
            if key == TEXT_KEY:
                ctx.title += value

    def _feed_section(self, ctx: ExtractionContext, node: Node) -> None:
        for key, value in node.attributes:
            if not ctx.section_started:
                ctx.section_started = _matches(value, SECTION_LABEL)
                continue
            if key == TEXT_KEY and value.strip():
                ctx.section = value
                ctx.phase = Phase.LENGTH
                return

    def _feed_length(self, ctx: ExtractionContext, node: Node) -> None:
        for key, value in node.attributes:
            if not ctx.length_started:
                ctx.length_started = _matches(value, LENGTH_LABEL)
                continue
            if key == TEXT_KEY and value.strip():
                ctx.length = value
                ctx.phase = Phase.BODY
                return

    def _feed_body(self, ctx: ExtractionContext, node: Node) -> bool:
        if not node.is_text or not node.text or node.text == "\n":
            return False
        if _matches(node.text, BODY_END_LABEL):
            ctx.body = collapse_spaces(ctx.body)
            return True
        ctx.body += clean_body_fragment(node.text) + " "
        return False

    def _build_record(self, ctx: ExtractionContext) -> ArticleRecord:
        return ArticleRecord(
            publication=ctx.publication,
            date=parse_article_date(ctx.date),
            section=ctx.section,
            length=ctx.length,
            title=ctx.title,
            body=ctx.body,
        )


def extract_articles(
    nodes: Iterable[Node],
    detector: BoundaryDetector,
    source: str = "document",
) -> Iterator[ArticleRecord]:
    """Yield every complete article found in a node stream.

    Articles with unreadable dates, and an article cut off by the end of the
    document, are logged and skipped.
    """
    extractor = ArticleExtractor(detector)
    for node in nodes:
        try:
            record = extractor.feed(node)
        except DateParseError as e:
            logger.warning("Dropping article in %s: %s", source, e)
            continue
        if record is not None:
            yield record

    try:
        extractor.close()
    except MarkerNotFoundError as e:
        logger.warning("Discarding incomplete article in %s: %s", source, e)


def extract_articles_from_file(path: Path, detector: BoundaryDetector) -> Iterator[ArticleRecord]:
    """Parse one export file and yield its articles.

    Read and parse errors propagate to the caller.
    """
    return extract_articles(iter_file_nodes(path), detector, source=str(path))

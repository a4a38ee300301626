"""Present parsed export files as a flat stream of nodes."""

import logging
from pathlib import Path
from typing import Iterator

from lxml import etree
from lxml import html as lxml_html

from extract_articles.models import Node

logger = logging.getLogger(__name__)

# Failures that make a single export file unusable
FILE_ERRORS = (OSError, UnicodeDecodeError, etree.LxmlError)

# Export files are written as UTF-8 whatever their meta tags claim.
_FILE_PARSER = lxml_html.HTMLParser(encoding="utf-8")


def _is_element(el) -> bool:
    # Comments and processing instructions have a callable tag
    return isinstance(el.tag, str)


def _element_node(el) -> Node:
    return Node(
        tag=el.tag,
        attributes=tuple((str(key), str(value)) for key, value in el.attrib.items()),
        text=el.text,
    )


def _child_nodes(el) -> Iterator[Node]:
    """Yield the direct children of an element: text fragments and elements."""
    if el.text:
        yield Node.text_fragment(el.text)
    for child in el:
        if _is_element(child):
            yield _element_node(child)
        if child.tail:
            yield Node.text_fragment(child.tail)


def iter_nodes(root) -> Iterator[Node]:
    """Linearize a parsed document.

    The root is yielded first, then every element is visited in document
    order and its direct children are yielded. An element therefore appears
    (as a child of its parent) before any of the text it contains, which is
    the order the article markers in an export are laid out in.
    """
    yield _element_node(root)
    for el in root.iter():
        if _is_element(el):
            yield from _child_nodes(el)


def parse_html(markup: str):
    """Parse an HTML string and return the document root."""
    return lxml_html.document_fromstring(markup)


def parse_document(path: Path):
    """Parse an export file and return the document root.

    Raises:
        OSError: If the file cannot be read.
        etree.ParserError: If the file holds no document.
    """
    tree = lxml_html.parse(str(path), parser=_FILE_PARSER)
    root = tree.getroot()
    if root is None:
        raise etree.ParserError(f"Document is empty: {path}")
    return root


def iter_file_nodes(path: Path) -> Iterator[Node]:
    """Yield the nodes of one export file, releasing the tree when exhausted."""
    root = parse_document(path)
    logger.debug("Parsed %s", path)
    yield from iter_nodes(root)

"""Tests for extract_articles.node_stream module."""

import pytest
from lxml import etree

from extract_articles.models import TEXT_KEY
from extract_articles.node_stream import iter_file_nodes, iter_nodes, parse_html


def _nodes(markup: str) -> list:
    return list(iter_nodes(parse_html(markup)))


class TestIterNodes:
    def test_root_comes_first(self) -> None:
        nodes = _nodes("<html><body><p>Hello</p></body></html>")
        assert nodes[0].tag == "html"

    def test_text_and_tails_in_document_order(self) -> None:
        nodes = _nodes("<html><body><p>Hello <b>bold</b> tail</p></body></html>")
        texts = [node.text for node in nodes if node.is_text]
        assert texts == ["Hello ", " tail", "bold"]

    def test_element_precedes_its_text(self) -> None:
        nodes = _nodes('<html><body><p class="c7">Title</p></body></html>')
        tags = [node.tag for node in nodes]
        assert tags.index("p") < tags.index(TEXT_KEY)

    def test_element_attributes_kept_in_order(self) -> None:
        nodes = _nodes('<html><body><span class="c7" id="t1">x</span></body></html>')
        span = next(node for node in nodes if node.tag == "span")
        assert span.attributes == (("class", "c7"), ("id", "t1"))
        assert span.attribute_values() == ["c7", "t1"]

    def test_text_fragment_carries_text_attribute(self) -> None:
        nodes = _nodes("<html><body><p>LOAD-DATE: </p></body></html>")
        fragment = next(node for node in nodes if node.is_text)
        assert fragment.attributes == ((TEXT_KEY, "LOAD-DATE: "),)

    def test_comments_skipped_but_tail_kept(self) -> None:
        nodes = _nodes("<html><body><p>a<!-- note -->b</p></body></html>")
        texts = [node.text for node in nodes if node.is_text]
        assert texts == ["a", "b"]


class TestIterFileNodes:
    def test_reads_utf8_file(self, tmp_path) -> None:
        path = tmp_path / "export.htm"
        path.write_text("<html><body><p>Erdoğan</p></body></html>", encoding="utf-8")
        texts = [node.text for node in iter_file_nodes(path) if node.is_text]
        assert texts == ["Erdoğan"]

    def test_missing_file_raises_os_error(self, tmp_path) -> None:
        with pytest.raises(OSError):
            list(iter_file_nodes(tmp_path / "missing.htm"))

    def test_empty_file_raises_lxml_error(self, tmp_path) -> None:
        path = tmp_path / "empty.htm"
        path.write_bytes(b"")
        with pytest.raises(etree.LxmlError):
            list(iter_file_nodes(path))

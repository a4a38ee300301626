"""Detect where a recognized article starts inside an export."""

from typing import Iterable, Mapping, Optional

from common.errors import ConfigError
from extract_articles.models import Node, PublicationFormat


class BoundaryDetector:
    """Match node attribute values against configured publication identifiers.

    Identifiers are compared case-insensitively. Several identifiers may map
    to one format, e.g. two editions of the same paper.
    """

    def __init__(self, identifiers: Mapping[str, PublicationFormat]):
        if not identifiers:
            raise ConfigError("At least one publication identifier is required")
        self._formats = {name.lower(): fmt for name, fmt in identifiers.items()}

    @classmethod
    def from_names(cls, names: Iterable[str]) -> "BoundaryDetector":
        """Build a detector for publications given by their export names."""
        identifiers = {}
        for name in names:
            try:
                identifiers[name] = PublicationFormat.from_name(name)
            except ValueError as exc:
                raise ConfigError(str(exc)) from exc
        return cls(identifiers)

    @property
    def formats(self) -> set[PublicationFormat]:
        return set(self._formats.values())

    def detect(self, node: Node) -> Optional[PublicationFormat]:
        """Return the publication whose identifier appears on the node, if any."""
        for value in node.attribute_values():
            fmt = self._formats.get(value.lower())
            if fmt is not None:
                return fmt
        return None

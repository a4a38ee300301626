"""YAML configuration loader for term counting runs."""

import logging
import os
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from common.config import find_config_path, load_yaml
from common.errors import ConfigError
from common.local_io import read_first_line
from count_terms.models import (
    DateWindow,
    TermDefinition,
    TermGroup,
    Weekday,
    iter_terms,
    term_key,
)
from extract_articles.boundary import BoundaryDetector
from extract_articles.models import PublicationFormat

# Load .env file if it exists
load_dotenv()

logger = logging.getLogger(__name__)

# Config directory relative to the repository root
CONFIG_DIR = Path(__file__).resolve().parents[2] / "configs"

HEADLINE_GROUP_LABEL = "Headline Term"


@dataclass
class HeadlineConfig:
    """Headline mode: list outlines of articles mentioning a term on a weekday."""

    enabled: bool = False
    term: str = "Syria"
    weekday: Weekday = Weekday.SATURDAY

    def __post_init__(self) -> None:
        if self.enabled and not self.term:
            raise ConfigError("Headline mode requires a headline term")

    @property
    def term_definition(self) -> TermDefinition:
        return TermDefinition.parse(self.term)


@dataclass
class RunConfig:
    input_dir: Path
    output_dir: Path
    term_groups: tuple[TermGroup, ...]
    date_windows: tuple[DateWindow, ...]
    publications: dict[str, PublicationFormat]
    headlines: HeadlineConfig = field(default_factory=HeadlineConfig)
    api_key: str = field(default="", repr=False)

    def __post_init__(self) -> None:
        if not self.term_groups:
            raise ConfigError("At least one term group is required")
        if not self.date_windows:
            raise ConfigError("At least one date window is required")
        if not self.publications:
            raise ConfigError("At least one publication is required")

        seen = set()
        for group, term in iter_terms(self.term_groups):
            key = term_key(group, term)
            if key in seen:
                raise ConfigError(f"Duplicate term {term.label!r} in group {group.label!r}")
            seen.add(key)

    @property
    def counted_groups(self) -> tuple[TermGroup, ...]:
        """Term groups to count, with the headline term appended in headline mode."""
        if not self.headlines.enabled:
            return self.term_groups
        headline_group = TermGroup(
            label=HEADLINE_GROUP_LABEL,
            terms=(self.headlines.term_definition,),
        )
        return self.term_groups + (headline_group,)

    def build_detector(self) -> BoundaryDetector:
        return BoundaryDetector(self.publications)


def _parse_term(entry: Any) -> TermDefinition:
    if isinstance(entry, str):
        term = TermDefinition.parse(entry)
    elif isinstance(entry, dict) and entry.get("label"):
        label = str(entry["label"])
        alternatives = entry.get("alternatives")
        if alternatives:
            term = TermDefinition(label=label, alternatives=tuple(str(a) for a in alternatives))
        else:
            term = TermDefinition.parse(label)
    else:
        raise ConfigError(f"Invalid term entry: {entry!r}")

    if not all(term.alternatives):
        raise ConfigError(f"Term {term.label!r} has an empty alternative")
    return term


def parse_term_groups(data: dict) -> tuple[TermGroup, ...]:
    """Parse ``groups: [{label, terms: [...]}, ...]`` into TermGroups."""
    groups = []
    for entry in data.get("groups") or []:
        label = entry.get("label") if isinstance(entry, dict) else None
        if not label:
            raise ConfigError(f"Term group without a label: {entry!r}")
        terms = tuple(_parse_term(t) for t in entry.get("terms") or [])
        if not terms:
            raise ConfigError(f"Term group {label!r} has no terms")
        groups.append(TermGroup(label=label, terms=terms))
    return tuple(groups)


def load_term_groups(path: Path) -> tuple[TermGroup, ...]:
    """Load a term vocabulary file."""
    if not path.exists():
        raise FileNotFoundError(f"Terms file not found: {path}")
    return parse_term_groups(load_yaml(path))


def _parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ConfigError(f"Invalid date {value!r}. Must be YYYY-MM-DD") from exc


def parse_date_windows(entries: list) -> tuple[DateWindow, ...]:
    windows = []
    for entry in entries or []:
        try:
            windows.append(DateWindow(start=_parse_date(entry["start"]), end=_parse_date(entry["end"])))
        except (KeyError, TypeError) as exc:
            raise ConfigError(f"Date window needs start and end: {entry!r}") from exc
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    return tuple(windows)


def parse_publications(entries: list) -> dict[str, PublicationFormat]:
    """Parse publication identifiers.

    Each entry is either an export name of a known publication, or a mapping
    ``{name: <identifier>, format: <known publication>}`` for identifiers that
    share another publication's format.
    """
    publications = {}
    for entry in entries or []:
        if isinstance(entry, str):
            name, format_name = entry, entry
        elif isinstance(entry, dict) and entry.get("name"):
            name, format_name = entry["name"], entry.get("format", entry["name"])
        else:
            raise ConfigError(f"Invalid publication entry: {entry!r}")
        try:
            publications[name] = PublicationFormat.from_name(format_name)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc
    return publications


def _parse_headline_config(data: Any) -> HeadlineConfig:
    if isinstance(data, bool):
        return HeadlineConfig(enabled=data)
    if not isinstance(data, dict):
        return HeadlineConfig()
    try:
        weekday = Weekday.parse(data.get("weekday", "saturday"))
    except ValueError as exc:
        raise ConfigError(str(exc)) from exc
    return HeadlineConfig(
        enabled=data.get("enabled", False),
        term=data.get("term", "Syria"),
        weekday=weekday,
    )


def load_api_key(path: Path) -> str:
    """Read the single-line API key, preferring the GUARDIAN_API_KEY variable."""
    key = os.getenv("GUARDIAN_API_KEY")
    if key:
        return key
    if not path.exists():
        raise FileNotFoundError(f"API key file not found: {path}")
    return read_first_line(path)


def load_config(name: str | None = None) -> RunConfig:
    """Load a run config by name (e.g. 'test' or 'prod') or path.

    Terms files are resolved relative to the config file. Input, output and
    key paths are resolved relative to the working directory, and the
    directories can be overridden with TERM_COUNTS_INPUT_DIR and
    TERM_COUNTS_OUTPUT_DIR.

    Raises:
        FileNotFoundError: If the config, terms or key file is missing.
        ConfigError: If the configuration is invalid.
    """
    config_path = find_config_path(name, CONFIG_DIR, env_var="CONFIG_ENV")
    data = load_yaml(config_path)
    logger.info("Loading config %s", config_path)

    terms_file = data.get("terms_file")
    if not terms_file:
        raise ConfigError(f"{config_path} does not name a terms_file")
    term_groups = load_term_groups(config_path.parent / terms_file)

    input_dir = os.getenv("TERM_COUNTS_INPUT_DIR") or data.get("input_dir")
    output_dir = os.getenv("TERM_COUNTS_OUTPUT_DIR") or data.get("output_dir", "output")
    if not input_dir:
        raise ConfigError(f"{config_path} does not set input_dir")

    api_key_file = data.get("api_key_file")
    api_key = load_api_key(Path(api_key_file)) if api_key_file else ""

    return RunConfig(
        input_dir=Path(input_dir),
        output_dir=Path(output_dir),
        term_groups=term_groups,
        date_windows=parse_date_windows(data.get("date_windows")),
        publications=parse_publications(data.get("publications")),
        headlines=_parse_headline_config(data.get("headlines", {})),
        api_key=api_key,
    )

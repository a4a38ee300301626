"""Parse the date line of an exported article."""

import calendar
from datetime import date

from common.errors import DateParseError

MONTHS = {name.lower(): number for number, name in enumerate(calendar.month_name) if name}


def parse_article_date(text: str) -> date:
    """Parse ``"<Month> <Day>, <Year> <Weekday...>"`` into a date.

    Anything after the year (weekday name, Guardian time stamps) is ignored.

    Raises:
        DateParseError: If the string does not have that shape, the month is
            unknown, or day/year are not integers.
    """
    parts = text.strip().split(", ")
    if len(parts) < 2:
        raise DateParseError(f"Expected '<Month> <Day>, <Year>': {text!r}")

    month_day = parts[0].split()
    if len(month_day) < 2:
        raise DateParseError(f"Expected '<Month> <Day>' before the comma: {text!r}")
    month_name, day = month_day[0], month_day[1]

    year_rest = parts[1].split()
    if not year_rest:
        raise DateParseError(f"Missing year: {text!r}")
    year = year_rest[0]

    month = MONTHS.get(month_name.lower())
    if month is None:
        raise DateParseError(f"Unknown month {month_name!r}: {text!r}")

    try:
        return date(int(year), month, int(day))
    except ValueError as exc:
        raise DateParseError(f"Invalid date {text!r}: {exc}") from exc

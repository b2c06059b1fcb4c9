"""Display helpers for post timestamps."""

from datetime import date, datetime

from dateutil import parser as date_parser

DateLike = date | datetime | str


def to_date(value: DateLike) -> date:
    """Coerce ``value`` to a :class:`date`.

    Strings are parsed as ISO-8601 (e.g. ``2024-01-05T10:20:30+00:00``); the
    calendar date is taken in the timestamp's own offset.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date_parser.isoparse(value.strip()).date()


def format_long_date(value: DateLike) -> str:
    """Return e.g. ``5 January 2024``, as shown in the article header."""
    day = to_date(value)
    return f"{day.day} {day:%B %Y}"


def format_short_date(value: DateLike) -> str:
    """Return e.g. ``05/01/2024``, as shown in admin listings."""
    return f"{to_date(value):%d/%m/%Y}"

"""Date helpers shared by the list, the form and the wire codec.

The catalogue carries plain calendar dates.  Display uses ``dd/mm/yyyy`` and
form inputs use ISO ``yyyy-mm-dd``.  Formatting never raises: empty or
unparseable input yields an empty string.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

from finproducts.config import (
    DISPLAY_DATE_FORMAT,
    INPUT_DATE_FORMAT,
    REVISION_OFFSET_YEARS,
)

DateLike = Union[date, datetime, str, None]


def parse_date(value: DateLike) -> Optional[date]:
    """Return *value* as a :class:`date`, or ``None`` when it cannot be read."""

    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return isoparse(text).date()
    except (ValueError, OverflowError):
        return None


def format_display_date(value: DateLike) -> str:
    parsed = parse_date(value)
    return parsed.strftime(DISPLAY_DATE_FORMAT) if parsed else ""


def format_input_date(value: DateLike) -> str:
    parsed = parse_date(value)
    return parsed.strftime(INPUT_DATE_FORMAT) if parsed else ""


def default_revision_date(release: DateLike) -> Optional[date]:
    """Return the suggested revision date: same month and day one year later.

    A 29 February release maps to 28 February of the following year.
    """

    parsed = parse_date(release)
    if parsed is None:
        return None
    return parsed + relativedelta(years=REVISION_OFFSET_YEARS)


__all__ = [
    "default_revision_date",
    "format_display_date",
    "format_input_date",
    "parse_date",
]

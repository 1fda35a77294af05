"""Resolve partial ``DD.MM.`` day labels into absolute dates.

Menu pages only print day and month for each day. The year comes from the
week heading (the anchor) and is carried forward from day to day, so a
week running from December into January picks up the new year on the
first day that would otherwise go backwards in time.
"""

import datetime
import re
from typing import Optional

from menuweek.errors import MenuStructureError

FULL_DATE_RE = re.compile(r"(\d{2})\.(\d{2})\.(\d{4})")
DAY_LABEL_RE = re.compile(r"(\d{2})\.(\d{2})\.")


def extract_first_date(text: str) -> Optional[datetime.date]:
    """Return the first valid ``DD.MM.YYYY`` date in ``text`` or ``None``."""
    for m in FULL_DATE_RE.finditer(text or ""):
        day, month, year = (int(g) for g in m.groups())
        try:
            return datetime.date(year, month, day)
        except ValueError:
            continue
    return None


def _build_date(year: int, month: int, day: int, label: str) -> datetime.date:
    try:
        return datetime.date(year, month, day)
    except ValueError as exc:
        raise MenuStructureError(f'Invalid date in day label "{label}": {exc}') from exc


def resolve_day_date(
    label: str,
    anchor: datetime.date,
    previous: Optional[datetime.date] = None,
) -> datetime.date:
    """Turn a day label into an absolute date.

    Args:
        label: Day heading such as ``"Mo, 30.12."``.
        anchor: Date parsed from the week heading.
        previous: Date resolved for the preceding day of the same week
            container, ``None`` for the first day.

    Returns:
        The resolved date. Never earlier than ``previous``.

    Raises:
        MenuStructureError: If the label holds no ``DD.MM.`` token or the
            token is not a calendar date.
    """
    m = DAY_LABEL_RE.search(label or "")
    if not m:
        raise MenuStructureError(f'Unable to parse day label "{label}".')
    day, month = int(m.group(1)), int(m.group(2))

    year = previous.year if previous is not None else anchor.year
    candidate = _build_date(year, month, day, label)

    if previous is not None and candidate < previous:
        candidate = _build_date(year + 1, month, day, label)

    if previous is None and candidate.month != anchor.month:
        candidate = _build_date(anchor.year, month, day, label)

    return candidate


def format_iso_date(value: datetime.date) -> str:
    return value.isoformat()

"""Group day menus into ISO-8601 weeks."""

import datetime
import math
from typing import Dict, Iterable, List, Tuple

from menuweek.models import DayMenu, WeekPartition


def iso_week(value: datetime.date) -> Tuple[int, int]:
    """Return ``(iso_year, iso_week)`` for a date.

    The date is moved to the Thursday of its week; that Thursday's year is
    the ISO year and its ordinal day gives the week number. Early January
    days can belong to the previous year's last week and late December
    days to the next year's week 1.
    """
    thursday = value + datetime.timedelta(days=4 - value.isoweekday())
    days_since_jan1 = (thursday - datetime.date(thursday.year, 1, 1)).days
    return thursday.year, math.ceil((days_since_jan1 + 1) / 7)


def week_key(iso_year: int, week: int) -> str:
    return f"{iso_year}-W{week:02d}"


def group_by_week(days: Iterable[DayMenu]) -> List[WeekPartition]:
    """Bucket day menus by ISO week.

    ``from``/``to`` are the smallest and largest ISO date strings of a
    bucket; the fixed ``YYYY-MM-DD`` width makes string order date order.
    Days inside a partition and the partitions themselves are sorted
    ascending.
    """
    buckets: Dict[Tuple[int, int], List[DayMenu]] = {}
    for day in days:
        key = iso_week(datetime.date.fromisoformat(day.date))
        buckets.setdefault(key, []).append(day)

    partitions = []
    for (year, week), members in sorted(buckets.items()):
        members.sort(key=lambda d: d.date)
        partitions.append(
            WeekPartition(
                iso_year=year,
                iso_week=week,
                from_date=members[0].date,
                to_date=members[-1].date,
                days=tuple(members),
            )
        )
    return partitions

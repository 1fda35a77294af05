"""Merge per-canteen week partitions into the two output documents.

:class:`WeekAggregator` is fed one parsed page per canteen and collects,
per ISO week, the shared week range plus one entry per canteen. Calling
:meth:`WeekAggregator.build` turns the collected state into immutable
:class:`OutputWeek` records (canteen-indexed); :func:`build_day_grouped_week`
derives the day-indexed view from one of them.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from menuweek.config import CanteenConfig
from menuweek.models import (
    CanteenDay,
    CanteenWeek,
    DayBucket,
    DayDetails,
    DayGroupedWeek,
    DayMenu,
    Legend,
    OutputWeek,
    ParsedMenu,
    WeekInfo,
    WeekPartition,
)
from menuweek.weeks import group_by_week, week_key


def days_to_map(days: Iterable[DayMenu]) -> Dict[str, DayDetails]:
    # partitions hold distinct dates per source, a repeated date would win
    return {d.date: DayDetails(label=d.label, categories=d.categories) for d in days}


class _WeekBuilder:
    def __init__(self, partition: WeekPartition) -> None:
        self.iso_year = partition.iso_year
        self.iso_week = partition.iso_week
        self.from_date = partition.from_date
        self.to_date = partition.to_date
        self.canteens: Dict[str, CanteenWeek] = {}

    def merge(
        self, canteen: CanteenConfig, legend: Optional[Legend], partition: WeekPartition
    ) -> None:
        self.from_date = min(self.from_date, partition.from_date)
        self.to_date = max(self.to_date, partition.to_date)
        self.canteens[canteen.slug] = CanteenWeek(
            name=canteen.name,
            source_url=canteen.url,
            legend=legend,
            days=days_to_map(partition.days),
        )

    def build(self, generated_at: str) -> OutputWeek:
        return OutputWeek(
            week=WeekInfo(
                iso_year=self.iso_year,
                iso_week=self.iso_week,
                from_date=self.from_date,
                to_date=self.to_date,
            ),
            generated_at=generated_at,
            canteens={slug: self.canteens[slug] for slug in sorted(self.canteens)},
        )


class WeekAggregator:
    """Collect parsed pages of several canteens, keyed by ISO week."""

    def __init__(self, generated_at: str) -> None:
        self.generated_at = generated_at
        self._weeks: Dict[str, _WeekBuilder] = {}

    def add(self, canteen: CanteenConfig, parsed: ParsedMenu) -> None:
        """Merge one canteen's page into the weeks it covers."""
        for partition in group_by_week(parsed.days):
            key = week_key(partition.iso_year, partition.iso_week)
            builder = self._weeks.get(key)
            if builder is None:
                builder = self._weeks[key] = _WeekBuilder(partition)
            builder.merge(canteen, parsed.legend, partition)

    def build(self) -> List[Tuple[str, OutputWeek]]:
        """Return ``(week_key, OutputWeek)`` pairs sorted by week key."""
        return [
            (key, self._weeks[key].build(self.generated_at))
            for key in sorted(self._weeks)
        ]


def build_day_grouped_week(source: OutputWeek) -> DayGroupedWeek:
    """Invert a canteen-indexed week into a day-indexed one.

    Each date takes its label from the first canteen (in slug order) that
    serves on that date. Dates and canteen slugs come out sorted.
    """
    labels: Dict[str, str] = {}
    per_day: Dict[str, Dict[str, CanteenDay]] = {}
    for slug in sorted(source.canteens):
        canteen = source.canteens[slug]
        for date, details in canteen.days.items():
            labels.setdefault(date, details.label)
            per_day.setdefault(date, {})[slug] = CanteenDay(
                name=canteen.name,
                source_url=canteen.source_url,
                legend=canteen.legend,
                categories=details.categories,
            )

    days = {
        date: DayBucket(
            label=labels[date],
            canteens={slug: per_day[date][slug] for slug in sorted(per_day[date])},
        )
        for date in sorted(per_day)
    }
    return DayGroupedWeek(week=source.week, generated_at=source.generated_at, days=days)

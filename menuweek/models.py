"""Value records produced by the extractor and the aggregator.

Every record is a frozen dataclass. ``to_dict`` returns the JSON shape
written to disk (camelCase keys, insertion order is the emitted order)
and ``from_dict`` rebuilds the record from such a mapping.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

CURRENCY = "EUR"
UNCATEGORIZED = "Uncategorized"


@dataclass(frozen=True)
class MealPrice:
    raw: str
    values: Tuple[float, ...]
    labels: Tuple[str, ...] = ()
    currency: str = CURRENCY

    def __post_init__(self) -> None:
        if self.labels and len(self.labels) != len(self.values):
            raise ValueError(
                f"price labels {self.labels!r} do not match {len(self.values)} values"
            )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "raw": self.raw,
            "currency": self.currency,
            "values": list(self.values),
            "labels": list(self.labels),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MealPrice":
        return cls(
            raw=data["raw"],
            values=tuple(float(v) for v in data["values"]),
            labels=tuple(data["labels"]),
            currency=data.get("currency", CURRENCY),
        )


@dataclass(frozen=True)
class MealEntry:
    title: str
    allergens: Tuple[str, ...] = ()
    allergens_raw: Optional[str] = None
    price: Optional[MealPrice] = None
    highlight: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "allergens": list(self.allergens),
            "allergensRaw": self.allergens_raw,
            "price": self.price.to_dict() if self.price else None,
            "highlight": self.highlight,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MealEntry":
        price = data.get("price")
        return cls(
            title=data["title"],
            allergens=tuple(data.get("allergens") or ()),
            allergens_raw=data.get("allergensRaw"),
            price=MealPrice.from_dict(price) if price else None,
            highlight=bool(data.get("highlight")),
        )


@dataclass(frozen=True)
class MealCategory:
    title: str
    meals: Tuple[MealEntry, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "meals": [m.to_dict() for m in self.meals]}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "MealCategory":
        return cls(
            title=data["title"],
            meals=tuple(MealEntry.from_dict(m) for m in data["meals"]),
        )


def _categories_to_list(categories: Tuple[MealCategory, ...]) -> list:
    return [c.to_dict() for c in categories]


def _categories_from_list(items) -> Tuple[MealCategory, ...]:
    return tuple(MealCategory.from_dict(c) for c in items)


@dataclass(frozen=True)
class DayMenu:
    date: str
    label: str
    categories: Tuple[MealCategory, ...]


@dataclass(frozen=True)
class Legend:
    info: Mapping[str, str] = field(default_factory=dict)
    allergens: Mapping[str, str] = field(default_factory=dict)
    additives: Mapping[str, str] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Dict[str, str]]:
        return {
            "info": dict(self.info),
            "allergens": dict(self.allergens),
            "additives": dict(self.additives),
        }

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> Optional["Legend"]:
        if data is None:
            return None
        return cls(
            info=dict(data.get("info") or {}),
            allergens=dict(data.get("allergens") or {}),
            additives=dict(data.get("additives") or {}),
        )


def _legend_to_dict(legend: Optional[Legend]) -> Optional[Dict[str, Dict[str, str]]]:
    return legend.to_dict() if legend is not None else None


@dataclass(frozen=True)
class ParsedMenu:
    """Everything extracted from one source page."""

    days: Tuple[DayMenu, ...]
    legend: Optional[Legend] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "days": [
                {
                    "date": d.date,
                    "label": d.label,
                    "categories": _categories_to_list(d.categories),
                }
                for d in self.days
            ],
            "legend": _legend_to_dict(self.legend),
        }


@dataclass(frozen=True)
class WeekInfo:
    iso_year: int
    iso_week: int
    from_date: str
    to_date: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "isoYear": self.iso_year,
            "isoWeek": self.iso_week,
            "from": self.from_date,
            "to": self.to_date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WeekInfo":
        return cls(
            iso_year=int(data["isoYear"]),
            iso_week=int(data["isoWeek"]),
            from_date=data["from"],
            to_date=data["to"],
        )


@dataclass(frozen=True)
class WeekPartition:
    iso_year: int
    iso_week: int
    from_date: str
    to_date: str
    days: Tuple[DayMenu, ...]


@dataclass(frozen=True)
class DayDetails:
    label: str
    categories: Tuple[MealCategory, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {"label": self.label, "categories": _categories_to_list(self.categories)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "DayDetails":
        return cls(label=data["label"], categories=_categories_from_list(data["categories"]))


@dataclass(frozen=True)
class CanteenWeek:
    name: str
    source_url: str
    legend: Optional[Legend]
    days: Mapping[str, DayDetails]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sourceUrl": self.source_url,
            "legend": _legend_to_dict(self.legend),
            "days": {d: details.to_dict() for d, details in self.days.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CanteenWeek":
        return cls(
            name=data["name"],
            source_url=data["sourceUrl"],
            legend=Legend.from_dict(data.get("legend")),
            days={d: DayDetails.from_dict(v) for d, v in data["days"].items()},
        )


@dataclass(frozen=True)
class OutputWeek:
    """Canteen-indexed document for one ISO week."""

    week: WeekInfo
    generated_at: str
    canteens: Mapping[str, CanteenWeek]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week": self.week.to_dict(),
            "generatedAt": self.generated_at,
            "canteens": {slug: c.to_dict() for slug, c in self.canteens.items()},
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OutputWeek":
        return cls(
            week=WeekInfo.from_dict(data["week"]),
            generated_at=data["generatedAt"],
            canteens={s: CanteenWeek.from_dict(c) for s, c in data["canteens"].items()},
        )


@dataclass(frozen=True)
class CanteenDay:
    name: str
    source_url: str
    legend: Optional[Legend]
    categories: Tuple[MealCategory, ...]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "sourceUrl": self.source_url,
            "legend": _legend_to_dict(self.legend),
            "categories": _categories_to_list(self.categories),
        }


@dataclass(frozen=True)
class DayBucket:
    label: str
    canteens: Mapping[str, CanteenDay]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "canteens": {slug: c.to_dict() for slug, c in self.canteens.items()},
        }


@dataclass(frozen=True)
class DayGroupedWeek:
    """Day-indexed document for one ISO week."""

    week: WeekInfo
    generated_at: str
    days: Mapping[str, DayBucket]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "week": self.week.to_dict(),
            "generatedAt": self.generated_at,
            "days": {d: bucket.to_dict() for d, bucket in self.days.items()},
        }

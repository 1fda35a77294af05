"""Turn a single menu item fragment into a :class:`MealEntry`."""

import copy
import re
from typing import List, Optional, Tuple

from bs4 import Tag

from menuweek.models import MealEntry, MealPrice
from menuweek.text import clean_text, parse_locale_number

PRICE_RE = re.compile(r"(\d{1,2},\d{2})")
HIGHLIGHT_CLASS = "item-tip"

_PRICE_LABELS = {
    2: ("students", "guests"),
    3: ("students", "staff", "guests"),
}


def derive_price_labels(count: int) -> Tuple[str, ...]:
    """Name the price tiers from the number of amounts found.

    Unknown layouts get no labels, the values are kept regardless.
    """
    return _PRICE_LABELS.get(count, ())


def parse_price(text: str) -> Optional[MealPrice]:
    """Parse every ``d,dd`` amount in ``text``, left to right.

    Returns ``None`` when the text holds no amount at all.
    """
    raw = clean_text(text)
    values = tuple(parse_locale_number(m.group(1)) for m in PRICE_RE.finditer(raw))
    if not values:
        return None
    return MealPrice(raw=raw, values=values, labels=derive_price_labels(len(values)))


def split_allergens(raw: str) -> Tuple[str, ...]:
    # set-like: keep the first occurrence of each code
    tokens: List[str] = [clean_text(t) for t in raw.split(",")]
    return tuple(dict.fromkeys(t for t in tokens if t))


def _strip_parens(text: str) -> str:
    if text.startswith("("):
        text = text[1:]
    if text.endswith(")"):
        text = text[:-1]
    return text


def parse_meal(item: Tag) -> MealEntry:
    """Extract title, allergens, price and highlight flag from an item.

    The title is the text of the item's first ``h4`` without its ``small``
    annotation. The annotation, e.g. ``(a, c, 12)``, lists the allergen
    codes.

    Args:
        item: The ``.item`` element of one dish.

    Returns:
        The normalized meal. ``title`` may be empty when the item has no
        heading; callers decide what to do with such items.
    """
    heading = item.find("h4")
    title = ""
    allergens_raw = ""
    if heading is not None:
        annotations = heading.find_all("small")
        allergens_raw = clean_text(
            _strip_parens(clean_text("".join(s.get_text() for s in annotations)))
        )
        stripped = copy.copy(heading)
        for small in stripped.find_all("small"):
            small.decompose()
        title = clean_text(stripped.get_text())

    price_text = "".join(p.get_text() for p in item.select(".price"))

    return MealEntry(
        title=title,
        allergens=split_allergens(allergens_raw) if allergens_raw else (),
        allergens_raw=allergens_raw or None,
        price=parse_price(price_text),
        highlight=HIGHLIGHT_CLASS in (item.get("class") or []),
    )

"""Parse a weekly menu page into day menus and an optional legend.

A page holds one or more week containers (``.box-speiseplan .block-space``).
Each container has a heading with the week's first date, a strip of day
labels (``.week .day``) and one dish row per day
(``.dishes .row.list-dish``). A dish row is split into ``.col-md-6``
columns in which ``h3`` headings open categories and ``.item`` elements
are the dishes.

The parser is heuristic to tolerate loosely structured markup, but it
refuses pages without any week container: that means the site changed.
"""

import datetime
import logging
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from menuweek.dates import extract_first_date, format_iso_date, resolve_day_date
from menuweek.errors import MenuStructureError
from menuweek.legend import parse_legend
from menuweek.meal import parse_meal
from menuweek.models import UNCATEGORIZED, DayMenu, MealCategory, MealEntry, ParsedMenu
from menuweek.text import clean_text

log = logging.getLogger(__name__)

WEEK_CONTAINER_SELECTOR = ".box-speiseplan .block-space"
DAY_LABEL_SELECTOR = ".week .day"
DISH_ROW_SELECTOR = ".dishes .row.list-dish"
COLUMN_CLASS = "col-md-6"
ITEM_CLASS = "item"


def load_html_from_file(path: str) -> str:
    """Load HTML content from a local file.

    Args:
        path: Path to the HTML file.

    Returns:
        The file contents decoded as UTF-8.
    """
    with open(path, "r", encoding="utf-8") as f:
        return f.read()


class _CategoryBuilder:
    def __init__(self, title: str) -> None:
        self.title = title
        self.meals: List[MealEntry] = []

    def build(self) -> MealCategory:
        return MealCategory(title=self.title, meals=tuple(self.meals))


def parse_dish_row(row: Tag) -> List[MealCategory]:
    """Collect the categories of one day's dish row.

    Categories keep their source order. Items that show up before any
    heading go into an implicit ``"Uncategorized"`` category. Categories
    without meals are dropped.
    """
    builders: List[_CategoryBuilder] = []

    for column in row.find_all(class_=COLUMN_CLASS, recursive=False):
        current: Optional[_CategoryBuilder] = None
        for node in column.children:
            if not isinstance(node, Tag):
                continue
            if node.name and node.name.lower() == "h3":
                current = _CategoryBuilder(clean_text(node.get_text()))
                builders.append(current)
                continue
            if ITEM_CLASS in (node.get("class") or []):
                meal = parse_meal(node)
                if not meal.title:
                    log.warning("Skipping dish without a title: %r", clean_text(node.get_text(" ")))
                    continue
                if current is None:
                    current = _CategoryBuilder(UNCATEGORIZED)
                    builders.append(current)
                current.meals.append(meal)

    return [b.build() for b in builders if b.meals]


def _parse_container(block: Tag, today: datetime.date) -> List[DayMenu]:
    heading = block.find("h2")
    heading_text = clean_text(heading.get_text()) if heading is not None else ""
    anchor = extract_first_date(heading_text)
    if anchor is None:
        log.debug("No date in week heading %r, anchoring on %s", heading_text, today)
        anchor = today

    day_nodes = block.select(DAY_LABEL_SELECTOR)
    dish_rows = block.select(DISH_ROW_SELECTOR)
    if len(day_nodes) != len(dish_rows):
        log.warning(
            "Day selector count (%d) does not match dish rows (%d).",
            len(day_nodes),
            len(dish_rows),
        )

    days: List[DayMenu] = []
    previous: Optional[datetime.date] = None
    for node, row in zip(day_nodes, dish_rows):
        label = clean_text(node.get_text())
        resolved = resolve_day_date(label, anchor, previous)
        days.append(
            DayMenu(
                date=format_iso_date(resolved),
                label=label,
                categories=tuple(parse_dish_row(row)),
            )
        )
        previous = resolved
    return days


def parse_menu_page(html: str, today: Optional[datetime.date] = None) -> ParsedMenu:
    """Parse a complete menu page.

    Args:
        html: Full HTML document as text.
        today: Fallback anchor for week headings without a date. Defaults
            to the current date.

    Returns:
        The day menus of all week containers in source order, plus the
        page legend if there is one.

    Raises:
        MenuStructureError: If the page has no week container or a day
            label has no parseable date.
    """
    soup = BeautifulSoup(html, "html.parser")
    blocks = soup.select(WEEK_CONTAINER_SELECTOR)
    if not blocks:
        raise MenuStructureError("Could not locate speiseplan container in page.")

    if today is None:
        today = datetime.date.today()

    days: List[DayMenu] = []
    for block in blocks:
        days.extend(_parse_container(block, today))

    return ParsedMenu(days=tuple(days), legend=parse_legend(soup))

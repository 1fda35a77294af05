"""Parse the "Erläuterungen" glossary printed below the menu.

The glossary is a row of three columns: info markers such as ``(V) vegan``,
allergen codes such as ``a1) Weizen`` and additive codes such as
``2) mit Konservierungsstoff``. Each column may start with a heading that
ends in a colon.
"""

import logging
import re
from typing import Dict, Optional

from bs4 import BeautifulSoup, Tag

from menuweek.models import Legend
from menuweek.text import clean_text

log = logging.getLogger(__name__)

LEGEND_HEADING = "erläuterungen"

INFO_RE = re.compile(r"\(([A-Z]{1,2})\)\s*([^,]+?)(?:(?:,|\.)\s|$)")
ALLERGEN_RE = re.compile(r"([a-z]\d?)\)\s*([^,]+?)(?:(?:,|\.)\s|$)")
ADDITIVE_RE = re.compile(r"(\d{1,2})\)\s*([^,]+?)(?:(?:,|\.)\s|$)")


def parse_legend_entries(text: str, pattern: re.Pattern) -> Dict[str, str]:
    """Scan one legend column for ``code -> description`` pairs.

    Anything up to and including the first colon is treated as the column
    heading and skipped. A trailing period is removed from descriptions.
    """
    text = clean_text(text)
    if ":" in text:
        text = text[text.index(":") + 1 :]
    entries: Dict[str, str] = {}
    for m in pattern.finditer(text):
        key = clean_text(m.group(1))
        if not key:
            continue
        value = clean_text(m.group(2))
        if value.endswith("."):
            value = value[:-1]
        entries[key] = value
    return entries


def _find_heading(soup: BeautifulSoup) -> Optional[Tag]:
    for h3 in soup.select(".box-speiseplan h3"):
        if clean_text(h3.get_text()).lower().startswith(LEGEND_HEADING):
            return h3
    return None


def _column_text(columns, index: int) -> str:
    if index >= len(columns):
        return ""
    return clean_text(columns[index].get_text(" "))


def parse_legend(soup: BeautifulSoup) -> Optional[Legend]:
    """Return the page legend, or ``None`` if the page has none.

    A missing legend is not an error: the menu is complete without it.
    """
    heading = _find_heading(soup)
    if heading is None:
        log.debug("No legend heading found")
        return None

    row = heading.find_next_sibling(class_="row")
    if row is None:
        log.debug("Legend heading has no row of columns")
        return None

    columns = row.select(".col-sm-4")
    if not columns:
        log.debug("Legend row has no columns")
        return None

    return Legend(
        info=parse_legend_entries(_column_text(columns, 0), INFO_RE),
        allergens=parse_legend_entries(_column_text(columns, 1), ALLERGEN_RE),
        additives=parse_legend_entries(_column_text(columns, 2), ADDITIVE_RE),
    )

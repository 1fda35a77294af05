"""Text helpers shared by the extractor modules."""

import re
from typing import Optional


# Characters to clean from parsed text (soft hyphen U+00AD and several zero-widths)
_INVISIBLE_REPLACEMENTS = {
    "\u00ad": "",  # soft hyphen
    "\u200b": "",  # zero width space
    "\ufeff": "",  # byte order mark
    "\u200e": "",  # left-to-right mark
    "\u200f": "",  # right-to-left mark
}

_WHITESPACE_RE = re.compile(r"\s+")


def clean_text(s: Optional[str]) -> str:
    """Collapse whitespace and drop invisible characters.

    Args:
        s: Input string, ``None`` is treated as empty.

    Returns:
        The normalized string, stripped at both ends.
    """
    if s is None:
        return ""
    if not isinstance(s, str):
        s = str(s)
    for k, v in _INVISIBLE_REPLACEMENTS.items():
        s = s.replace(k, v)
    # \s also covers the non-breaking space
    return _WHITESPACE_RE.sub(" ", s).strip()


def parse_locale_number(value: str) -> float:
    """Parse a German formatted number such as ``1.234,50``.

    Dots are thousands separators and the comma is the decimal separator.
    """
    return float(value.replace(".", "").replace(",", "."))

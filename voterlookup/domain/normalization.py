"""
Text normalization helpers shared by the search flow.
Pure functions, no I/O.
"""

import re
from typing import Optional

ARMENIAN_LIGATURE = "\u0587"  # և
ARMENIAN_LIGATURE_EXPANDED = "\u0565\u0582"  # եւ

_WHITESPACE_RE = re.compile(r"\s+")
# ASCII digits only: str.isdigit() also accepts "²" and Arabic-Indic digits
_DATE_RE = re.compile(r"(\d+)/(\d+)/(\d+)", re.ASCII)


def normalize_armenian_text(text: Optional[str]) -> Optional[str]:
    """The registry stores the ligature as two letters, so "և" never matches."""
    if not text:
        return text
    return text.replace(ARMENIAN_LIGATURE, ARMENIAN_LIGATURE_EXPANDED)


def clean_text(text: str) -> str:
    """Collapse whitespace runs into a single space and trim."""
    return _WHITESPACE_RE.sub(" ", text or "").strip()


def convert_date_format(date_str: Optional[str]) -> str:
    """
    Convert DD/MM/YYYY into the YYYY-MM-DD form expected by the registry.
    Returns "" for anything that is not a plausible date.
    """
    if not date_str or not date_str.strip():
        return ""

    parts = [p.strip() for p in date_str.strip().split("/")]
    match = _DATE_RE.fullmatch("/".join(parts))
    if match is None:
        return ""

    day, month, year = match.groups()

    day_num, month_num, year_num = int(day), int(month), int(year)
    if not (1 <= day_num <= 31 and 1 <= month_num <= 12 and 1900 <= year_num <= 2100):
        return ""

    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"

"""
Parsing for the registry's HTML responses.
Kept free of I/O so the fragile part can be tested against fixed fixtures.
"""

import logging
from typing import List, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..domain.entities.search_result import SearchResultRow
from ..domain.normalization import clean_text

logger = logging.getLogger(__name__)

TOKEN_FIELD_NAME = "__RequestVerificationToken"
MIN_CELLS_PER_ROW = 5


def extract_verification_token(html: str) -> Optional[str]:
    """Value of the hidden anti-forgery input, or None when absent/empty."""
    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")
    field = soup.find("input", attrs={"name": TOKEN_FIELD_NAME})
    if field is None:
        return None
    value = field.get("value")
    return str(value) if value else None


def is_hidden_row(row: Tag) -> bool:
    style = (row.get("style") or "").replace(" ", "").lower()
    return "display:none" in style


def parse_result_row(row: Tag) -> Optional[SearchResultRow]:
    """A row is either fully extracted or skipped (returns None)."""
    if is_hidden_row(row):
        return None

    cells = row.find_all("td")
    if len(cells) < MIN_CELLS_PER_ROW:
        return None

    values = [clean_text(cell.get_text()) for cell in cells[:MIN_CELLS_PER_ROW]]
    if not values[0]:
        return None

    return SearchResultRow(
        name=values[0],
        birth_date=values[1],
        region_community=values[2],
        address=values[3],
        district=values[4],
    )


def parse_result_table(html: str) -> Optional[List[SearchResultRow]]:
    """
    Parse every <tr> of every <tbody> in document order.
    Returns None when the page has no result table at all.
    """
    soup = BeautifulSoup(html or "", "html.parser")
    bodies = soup.find_all("tbody")
    if not bodies:
        logger.info("[Parser] No result table in response")
        return None

    rows: List[SearchResultRow] = []
    skipped = 0
    for body in bodies:
        for tr in body.find_all("tr"):
            parsed = parse_result_row(tr)
            if parsed is None:
                skipped += 1
                continue
            rows.append(parsed)

    if skipped:
        logger.debug(f"[Parser] Skipped {skipped} hidden/short/blank rows")
    return rows

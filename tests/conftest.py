"""
Root conftest.py: shared fixtures and helpers for the entire test suite.

Provides:
- SearchParams / SearchResultRow / SessionToken factories
- HTML fixture builders mirroring the registry's markup
- Mock gateway fixtures (for use-case tests)
"""

from typing import List, Optional, Sequence
from unittest.mock import AsyncMock

import pytest

from voterlookup.domain.entities.page_outcome import PageFetchOutcome
from voterlookup.domain.entities.search_params import SearchParams
from voterlookup.domain.entities.search_result import SearchResultRow
from voterlookup.domain.entities.session_token import SessionToken
from voterlookup.domain.interfaces.i_registry_gateway import FetchedToken


# ─────────────────────────────────────────────────────────────────────────────
# Domain object factories
# ─────────────────────────────────────────────────────────────────────────────


def make_params(
    first_name: str = "Գրիգոր",
    last_name: str = "Գրիգորյան",
    **kwargs,
) -> SearchParams:
    """Create SearchParams with sensible test defaults."""
    return SearchParams(first_name=first_name, last_name=last_name, **kwargs)


def make_row(
    name: str = "ԳՐԻԳՈՐՅԱՆ ԳՐԻԳՈՐ ՍԱՄՎԵԼԻ",
    birth_date: str = "18/05/1981",
    region_community: str = "ԵՐԵՎԱՆ/ԿԵՆՏՐՈՆ",
    address: str = "ԱԲՈՎՅԱՆ Փ. 1 բն. 2",
    district: str = "1/01",
) -> SearchResultRow:
    return SearchResultRow(
        name=name,
        birth_date=birth_date,
        region_community=region_community,
        address=address,
        district=district,
    )


def make_token(
    token: str = "tok-123",
    cookie: str = ".AspNetCore.Antiforgery=abc",
    fetched_at: float = 1000.0,
) -> SessionToken:
    return SessionToken(token=token, cookie=cookie, fetched_at=fetched_at)


def make_fetched_token(
    token: str = "tok-123", cookie: str = ".AspNetCore.Antiforgery=abc"
) -> FetchedToken:
    return FetchedToken(token=token, cookie=cookie)


# ─────────────────────────────────────────────────────────────────────────────
# HTML builders
# ─────────────────────────────────────────────────────────────────────────────


def token_page_html(token: Optional[str] = "tok-123") -> str:
    field = (
        f'<input name="__RequestVerificationToken" type="hidden" value="{token}" />'
        if token is not None
        else ""
    )
    return f"<html><body><form method='post'>{field}<input name='Input.FirstName'/></form></body></html>"


def row_html(cells: Sequence[str], style: Optional[str] = None) -> str:
    style_attr = f' style="{style}"' if style is not None else ""
    tds = "".join(f"<td>{c}</td>" for c in cells)
    return f"<tr{style_attr}>{tds}</tr>"


def result_page_html(rows: List[str]) -> str:
    return (
        "<html><body><table class='table'>"
        "<thead><tr><th>Name</th><th>Birth</th><th>Region</th><th>Address</th><th>District</th></tr></thead>"
        f"<tbody>{''.join(rows)}</tbody>"
        "</table></body></html>"
    )


def rows_page_html(rows: List[SearchResultRow]) -> str:
    return result_page_html(
        [
            row_html([r.name, r.birth_date, r.region_community, r.address, r.district])
            for r in rows
        ]
    )


NO_TABLE_HTML = "<html><body><p>Ոչինչ չի գտնվել</p></body></html>"


# ─────────────────────────────────────────────────────────────────────────────
# Mock gateway fixtures
# ─────────────────────────────────────────────────────────────────────────────


async def no_sleep(_seconds: float) -> None:
    return None


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def mock_registry():
    """AsyncMock for IRegistryGateway. Defaults to a token and one empty page."""
    mock = AsyncMock()
    mock.fetch_token.return_value = make_fetched_token()
    mock.fetch_page.return_value = PageFetchOutcome.empty_table()
    return mock


@pytest.fixture
def mock_token_cache():
    """AsyncMock for SessionTokenCache. Always hands out the same token."""
    mock = AsyncMock()
    mock.get_token.return_value = make_token()
    return mock

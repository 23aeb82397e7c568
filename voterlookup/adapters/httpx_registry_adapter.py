"""
HttpxRegistryAdapter - Implements IRegistryGateway.
Talks to the voter-registry web form with httpx, parses with BeautifulSoup.
Every request carries browser-like headers; the form rejects bare clients.
"""

import logging
from typing import Dict, List, Optional
from urllib.parse import urlsplit

import httpx

from ..domain.entities.page_outcome import PageFetchOutcome
from ..domain.entities.search_params import SearchParams
from ..domain.entities.session_token import SessionToken
from ..domain.errors import NetworkError
from ..domain.interfaces.i_registry_gateway import FetchedToken, IRegistryGateway
from .registry_html_parser import (
    TOKEN_FIELD_NAME,
    extract_verification_token,
    parse_result_table,
)

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://prelive.elections.am/Register"
TIMEOUT_SECONDS = 20.0
PAGE_SIZE = 100

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/131.0.0.0 Safari/537.36"
)

BROWSER_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/avif,image/webp,*/*;q=0.8",
    "Accept-Language": "ru-RU,ru;q=0.9,en-US;q=0.8,en;q=0.7,hy;q=0.6",
    "Accept-Encoding": "gzip, deflate",
    "Cache-Control": "max-age=0",
    "Sec-Ch-Ua": '"Google Chrome";v="131", "Chromium";v="131", "Not_A Brand";v="24"',
    "Sec-Ch-Ua-Mobile": "?0",
    "Sec-Ch-Ua-Platform": '"Windows"',
    "Upgrade-Insecure-Requests": "1",
    "DNT": "1",
}

# (remote field suffix, SearchParams attribute); each goes out as Current.X and Input.X
_PAIRED_FIELDS = (
    ("FirstName", "first_name"),
    ("LastName", "last_name"),
    ("MiddleName", "middle_name"),
)
_TRAILING_FIELDS = (
    ("Street", "street"),
    ("Building", "building"),
    ("Apartment", "apartment"),
    ("District", "district"),
)


def build_search_form(
    params: SearchParams, token: str, page_index: int
) -> Dict[str, str]:
    """
    Form body in the remote model-binding convention: "Current.*" carries the
    active filter, "Input.*" mirrors what the user typed.
    """
    form: Dict[str, str] = {
        "ShowCaptcha": "False",
        "Input.Region": params.region,
        "Current.Region": params.region,
        "RegisterPaging.PageSize": str(PAGE_SIZE),
        TOKEN_FIELD_NAME: token,
    }

    for suffix, attr in _PAIRED_FIELDS:
        value = getattr(params, attr)
        if value:
            form[f"Current.{suffix}"] = value
            form[f"Input.{suffix}"] = value

    birth_date = params.iso_birth_date
    if birth_date:
        form["Current.BirthDate"] = birth_date
        form["Input.BirthDateUI"] = birth_date

    if params.community:
        form["Input.Community"] = params.community
        form["Current.Community"] = params.community

    for suffix, attr in _TRAILING_FIELDS:
        value = getattr(params, attr)
        if value:
            form[f"Current.{suffix}"] = value
            form[f"Input.{suffix}"] = value

    form["RegisterPaging.PageIndex"] = str(page_index)
    return form


def join_set_cookies(set_cookie_headers: List[str]) -> str:
    """
    Reduce Set-Cookie headers to a Cookie header ("a=1; b=2").

    Attributes (path, expires, httponly, samesite) are stripped on purpose:
    only the name=value pairs are sent back to the registry.
    """
    pairs = []
    for header in set_cookie_headers:
        pair = header.split(";", 1)[0].strip()
        if pair:
            pairs.append(pair)
    return "; ".join(pairs)


class HttpxRegistryAdapter(IRegistryGateway):
    """
    Registry client. A fresh AsyncClient is opened per call so concurrent
    searches never share connection state; the session lives in the cookie
    header carried by the SessionToken.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = TIMEOUT_SECONDS,
        proxy: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.proxy = proxy
        self.transport = transport
        parts = urlsplit(base_url)
        self.origin = f"{parts.scheme}://{parts.netloc}"

    def _client(self) -> httpx.AsyncClient:
        kwargs = {
            "timeout": self.timeout_seconds,
            "headers": BROWSER_HEADERS,
            "follow_redirects": True,
        }
        if self.proxy:
            kwargs["proxy"] = self.proxy
        if self.transport is not None:
            kwargs["transport"] = self.transport
        return httpx.AsyncClient(**kwargs)

    async def fetch_token(self) -> Optional[FetchedToken]:
        try:
            async with self._client() as client:
                response = await client.get(
                    self.base_url,
                    headers={
                        "Sec-Fetch-Dest": "document",
                        "Sec-Fetch-Mode": "navigate",
                        "Sec-Fetch-Site": "none",
                        "Sec-Fetch-User": "?1",
                    },
                )
        except httpx.TimeoutException as e:
            logger.warning(f"[Registry] Timeout loading token page: {e}")
            raise NetworkError(f"Timeout loading {self.base_url}") from e
        except httpx.HTTPError as e:
            logger.warning(f"[Registry] Error loading token page: {e}")
            raise NetworkError(str(e)) from e

        logger.info(f"[Registry] Token page status={response.status_code}")
        if response.status_code != 200:
            logger.warning(f"[Registry] Unexpected token page status {response.status_code}")
            return None

        token = extract_verification_token(response.text)
        if not token:
            logger.warning("[Registry] Token field missing from form page")
            return None

        cookie = join_set_cookies(response.headers.get_list("set-cookie"))
        return FetchedToken(token=token, cookie=cookie)

    async def fetch_page(
        self,
        params: SearchParams,
        token: SessionToken,
        page_index: int,
    ) -> PageFetchOutcome:
        form = build_search_form(params, token.token, page_index)
        headers = {
            "Content-Type": "application/x-www-form-urlencoded",
            "Cookie": token.cookie or "",
            "Origin": self.origin,
            "Referer": self.base_url,
            "Sec-Fetch-Dest": "iframe",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "same-origin",
            "Sec-Fetch-User": "?1",
        }

        try:
            async with self._client() as client:
                response = await client.post(self.base_url, data=form, headers=headers)
        except httpx.TimeoutException as e:
            logger.warning(f"[Registry] Timeout on page {page_index}: {e}")
            return PageFetchOutcome.network_error("Timeout")
        except httpx.HTTPError as e:
            logger.warning(f"[Registry] Error on page {page_index}: {e}")
            return PageFetchOutcome.network_error(str(e) or type(e).__name__)

        logger.info(f"[Registry] Page {page_index} status={response.status_code}")
        if response.status_code != 200:
            return PageFetchOutcome.http_error(response.status_code)

        rows = parse_result_table(response.text)
        if rows is None:
            return PageFetchOutcome.empty_table()
        return PageFetchOutcome.with_rows(rows)

"""
SearchRegistryUseCase - One logical search across the registry's result pages.

Init → TokenAcquired → Paging(1..cap) → Done

Pages are fetched strictly in order with a short pause between them.
The loop ends on the page cap, a missing table, the first page without
usable rows, or an upstream failure. Upstream failures keep whatever was
already collected; only a network failure on the very first page is raised.
"""

import asyncio
import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Awaitable, Callable, List, Optional

from ..domain.entities.page_outcome import PageOutcomeKind
from ..domain.entities.search_params import SearchParams
from ..domain.entities.search_result import SearchResultRow
from ..domain.errors import NetworkError, RegistryError, UpstreamHttpError
from ..domain.interfaces.i_registry_gateway import IRegistryGateway
from .session_token_cache import SessionTokenCache

logger = logging.getLogger(__name__)

MAX_PAGES = 3
ADDRESS_QUALIFIED_MAX_PAGES = 1
PAGE_DELAY_SECONDS = 0.5

_SEP = "=" * 70


class StopReason(str, Enum):
    PAGE_CAP = "page_cap"
    EMPTY_PAGE = "empty_page"
    NO_TABLE = "no_table"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"


@dataclass
class SearchRegistryResponse:
    results: List[SearchResultRow] = field(default_factory=list)
    pages_fetched: int = 0
    stop_reason: StopReason = StopReason.PAGE_CAP
    # Set when an upstream failure cut pagination short
    truncated_by: Optional[RegistryError] = None

    @property
    def count(self) -> int:
        return len(self.results)

    @property
    def is_partial(self) -> bool:
        return self.truncated_by is not None


class SearchRegistryUseCase:
    """
    Orchestrates token acquisition and the paginated scrape.
    Dependencies injected via constructor.
    """

    def __init__(
        self,
        token_cache: SessionTokenCache,
        registry: IRegistryGateway,
        max_pages: int = MAX_PAGES,
        page_delay_seconds: float = PAGE_DELAY_SECONDS,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.token_cache = token_cache
        self.registry = registry
        self.max_pages = max(1, max_pages)
        self.page_delay_seconds = page_delay_seconds
        self._sleep = sleep

    def page_cap_for(self, params: SearchParams) -> int:
        if params.has_address:
            return ADDRESS_QUALIFIED_MAX_PAGES
        return self.max_pages

    async def search(self, params: SearchParams) -> List[SearchResultRow]:
        response = await self.execute(params)
        return response.results

    async def execute(self, params: SearchParams) -> SearchRegistryResponse:
        params = params.normalized()
        params.validate()

        started = time.monotonic()
        logger.info(_SEP)
        logger.info(
            f"[Search] START {params.first_name!r} {params.last_name!r} | "
            f"region={params.region!r} | community={params.community!r} | "
            f"birth_date={params.iso_birth_date!r} | address={params.has_address}"
        )

        # Snapshot: the same token is used for every page of this search
        token = await self.token_cache.get_token()

        page_cap = self.page_cap_for(params)
        response = SearchRegistryResponse()

        for page_index in range(1, page_cap + 1):
            logger.info(f"[Search] Requesting page {page_index}/{page_cap}")
            outcome = await self.registry.fetch_page(params, token, page_index)
            response.pages_fetched += 1

            if outcome.kind == PageOutcomeKind.HTTP_ERROR:
                logger.warning(
                    f"[Search] Page {page_index}: HTTP {outcome.status_code}, "
                    f"stopping with {response.count} results"
                )
                response.stop_reason = StopReason.HTTP_ERROR
                response.truncated_by = UpstreamHttpError(outcome.status_code or 0)
                break

            if outcome.kind == PageOutcomeKind.NETWORK_ERROR:
                if page_index == 1:
                    logger.error(f"[Search] Page 1 failed: {outcome.error}")
                    raise NetworkError(f"Registry request failed: {outcome.error}")
                logger.warning(
                    f"[Search] Page {page_index}: {outcome.error}, "
                    f"stopping with {response.count} results"
                )
                response.stop_reason = StopReason.NETWORK_ERROR
                response.truncated_by = NetworkError(outcome.error or "network error")
                break

            if outcome.kind == PageOutcomeKind.EMPTY_TABLE:
                logger.info(f"[Search] Page {page_index}: no result table")
                response.stop_reason = StopReason.NO_TABLE
                break

            if not outcome.rows:
                logger.info(f"[Search] Page {page_index}: no results")
                response.stop_reason = StopReason.EMPTY_PAGE
                break

            response.results.extend(outcome.rows)
            first = outcome.rows[0]
            logger.info(
                f"[Search] Page {page_index}: {len(outcome.rows)} results "
                f"(e.g. {first.name} | {first.birth_date})"
            )

            if page_index < page_cap:
                await self._sleep(self.page_delay_seconds)

        logger.info(
            f"[Search] DONE {response.count} results | pages={response.pages_fetched} | "
            f"stop={response.stop_reason.value} | {time.monotonic() - started:.2f}s"
        )
        logger.info(_SEP)
        return response

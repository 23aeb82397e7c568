"""
SessionTokenCache - Holds the registry's anti-forgery token.

- Serves the cached token while it is younger than the TTL (5 minutes).
- Refreshes through a single in-flight task: concurrent callers await the
  same task instead of issuing their own GET.
- Retries with exponential backoff, then falls back to the stale token
  (degraded) or raises TokenUnavailable when nothing was ever cached.
"""

import asyncio
import logging
import time
from typing import Awaitable, Callable, Dict, Optional

from ..domain.entities.session_token import SessionToken
from ..domain.errors import NetworkError, TokenUnavailable
from ..domain.interfaces.i_registry_gateway import IRegistryGateway

logger = logging.getLogger(__name__)

TOKEN_CACHE_TTL_SECONDS = 5 * 60
MAX_ATTEMPTS = 3
RETRY_BASE_DELAY_SECONDS = 2.0

# The cache has exactly one slot; the in-flight registry is keyed by it.
_CACHE_SLOT = "registry-session"


class SessionTokenCache:
    """
    Explicit cache object shared by every search in the process.
    Injected into SearchRegistryUseCase by the container.
    """

    def __init__(
        self,
        gateway: IRegistryGateway,
        ttl_seconds: float = TOKEN_CACHE_TTL_SECONDS,
        max_attempts: int = MAX_ATTEMPTS,
        retry_base_delay_seconds: float = RETRY_BASE_DELAY_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.gateway = gateway
        self.ttl_seconds = ttl_seconds
        self.max_attempts = max(1, max_attempts)
        self.retry_base_delay_seconds = retry_base_delay_seconds
        self._clock = clock
        self._sleep = sleep
        self._token: Optional[SessionToken] = None
        self._inflight: Dict[str, "asyncio.Task[SessionToken]"] = {}

    @property
    def cached_token(self) -> Optional[SessionToken]:
        return self._token

    def status(self) -> str:
        """'empty', 'fresh' or 'stale', as reported by the health probe."""
        if self._token is None:
            return "empty"
        if self._token.is_fresh(self._clock(), self.ttl_seconds):
            return "fresh"
        return "stale"

    async def get_token(self) -> SessionToken:
        cached = self._token
        if cached is not None and cached.is_fresh(self._clock(), self.ttl_seconds):
            logger.info(
                f"[TokenCache] Using cached token (age={cached.age(self._clock()):.0f}s)"
            )
            return cached

        task = self._inflight.get(_CACHE_SLOT)
        if task is None or task.done():
            task = asyncio.get_running_loop().create_task(self._refresh())
            self._inflight[_CACHE_SLOT] = task
            task.add_done_callback(self._release_slot)
        else:
            logger.info("[TokenCache] Waiting for in-flight token fetch")

        # shield: a cancelled caller must not cancel the shared refresh
        return await asyncio.shield(task)

    def _release_slot(self, task: "asyncio.Task[SessionToken]") -> None:
        if self._inflight.get(_CACHE_SLOT) is task:
            del self._inflight[_CACHE_SLOT]
        if not task.cancelled() and task.exception() is not None:
            logger.debug(f"[TokenCache] Refresh finished with {task.exception()!r}")

    async def _refresh(self) -> SessionToken:
        for attempt in range(1, self.max_attempts + 1):
            logger.info(f"[TokenCache] Fetching token (attempt {attempt}/{self.max_attempts})")
            try:
                fetched = await self.gateway.fetch_token()
            except NetworkError as e:
                logger.warning(
                    f"[TokenCache] Fetch failed (attempt {attempt}/{self.max_attempts}): {e}"
                )
                fetched = None

            if fetched is not None and fetched.token:
                token = SessionToken(
                    token=fetched.token,
                    cookie=fetched.cookie,
                    fetched_at=self._clock(),
                )
                self._token = token
                logger.info("[TokenCache] Fresh token cached")
                return token

            if attempt < self.max_attempts:
                delay = self.retry_base_delay_seconds * (2 ** (attempt - 1))
                logger.info(f"[TokenCache] Retrying in {delay:.1f}s")
                await self._sleep(delay)

        logger.error(f"[TokenCache] Token fetch failed after {self.max_attempts} attempts")

        stale = self._token
        if stale is not None:
            logger.warning(
                f"[TokenCache] DEGRADED: serving stale token "
                f"(age={stale.age(self._clock()):.0f}s)"
            )
            return stale

        raise TokenUnavailable(
            "Registry token unavailable: remote service unreachable or blocked. "
            "Configure PROXY_URL to route through a residential proxy."
        )

"""
Dependency Injection Container.
Wires the registry adapter, the shared token cache and the search use case.
This is the ONLY place that knows about concrete implementations.
"""

from .config import Config
from ..adapters.httpx_registry_adapter import HttpxRegistryAdapter
from ..use_cases.search_registry import SearchRegistryUseCase
from ..use_cases.session_token_cache import SessionTokenCache


class Container:
    """
    Composes the full application object graph.
    One Container per process, so one token cache per process.
    """

    def __init__(self, config: Config):
        self.config = config

        # ── Adapters ───────────────────────────────────────────────────────
        self.registry = HttpxRegistryAdapter(
            base_url=config.registry_base_url,
            timeout_seconds=config.request_timeout_seconds,
            proxy=config.effective_proxy,
        )

        # ── Shared state ───────────────────────────────────────────────────
        self.token_cache = SessionTokenCache(
            gateway=self.registry,
            ttl_seconds=config.token_ttl_seconds,
            max_attempts=config.token_max_attempts,
            retry_base_delay_seconds=config.token_retry_base_delay_seconds,
        )

        # ── Use Cases ──────────────────────────────────────────────────────
        self.search_use_case = SearchRegistryUseCase(
            token_cache=self.token_cache,
            registry=self.registry,
            max_pages=config.max_pages,
            page_delay_seconds=config.page_delay_seconds,
        )

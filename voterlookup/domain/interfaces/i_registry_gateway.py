"""
IRegistryGateway - Port: the remote voter-registry web form.
Implementations own the wire format (headers, form field names, HTML).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ..entities.page_outcome import PageFetchOutcome
from ..entities.search_params import SearchParams
from ..entities.session_token import SessionToken


@dataclass
class FetchedToken:
    token: str
    cookie: str


class IRegistryGateway(ABC):
    """Port for the two registry calls: token page GET and results POST."""

    @abstractmethod
    async def fetch_token(self) -> Optional[FetchedToken]:
        """
        Loads the search form and extracts the anti-forgery token.
        Returns None on a non-200 status or when the token field is missing.
        Raises NetworkError on transport failures.
        """
        pass

    @abstractmethod
    async def fetch_page(
        self,
        params: SearchParams,
        token: SessionToken,
        page_index: int,
    ) -> PageFetchOutcome:
        """
        Submits the search form for one result page.
        Never raises for HTTP or transport failures; they come back as outcomes.
        """
        pass

"""
PageFetchOutcome - Result of fetching one page of registry results.
Drives the pagination continue/stop decision in the search use case.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .search_result import SearchResultRow


class PageOutcomeKind(str, Enum):
    ROWS = "rows"
    EMPTY_TABLE = "empty_table"
    HTTP_ERROR = "http_error"
    NETWORK_ERROR = "network_error"


@dataclass(frozen=True)
class PageFetchOutcome:
    kind: PageOutcomeKind
    rows: List[SearchResultRow] = field(default_factory=list)
    status_code: Optional[int] = None
    error: Optional[str] = None

    @classmethod
    def with_rows(cls, rows: List[SearchResultRow]) -> "PageFetchOutcome":
        return cls(kind=PageOutcomeKind.ROWS, rows=list(rows), status_code=200)

    @classmethod
    def empty_table(cls) -> "PageFetchOutcome":
        return cls(kind=PageOutcomeKind.EMPTY_TABLE, status_code=200)

    @classmethod
    def http_error(cls, status_code: int) -> "PageFetchOutcome":
        return cls(kind=PageOutcomeKind.HTTP_ERROR, status_code=status_code)

    @classmethod
    def network_error(cls, cause: str) -> "PageFetchOutcome":
        return cls(kind=PageOutcomeKind.NETWORK_ERROR, error=cause)

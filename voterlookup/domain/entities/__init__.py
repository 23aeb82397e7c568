from .search_params import SearchParams, DEFAULT_REGION
from .search_result import SearchResultRow
from .session_token import SessionToken
from .page_outcome import PageFetchOutcome, PageOutcomeKind

__all__ = [
    "SearchParams",
    "DEFAULT_REGION",
    "SearchResultRow",
    "SessionToken",
    "PageFetchOutcome",
    "PageOutcomeKind",
]

"""
SearchResultRow - One voter row scraped from the registry result table.
"""

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass
class SearchResultRow:
    name: str
    birth_date: str
    region_community: str
    address: str
    district: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)

"""
SearchParams - Value object describing one registry query.
Immutable; normalized() returns a cleaned copy rather than mutating.
"""

from dataclasses import dataclass, fields, replace
from typing import Any, Dict

from ..errors import ValidationError
from ..normalization import convert_date_format, normalize_armenian_text

DEFAULT_REGION = "ԵՐԵՎԱՆ"
MIN_NAME_LENGTH = 2

MISSING_NAME_MESSAGE = "Name and surname are required / Անունը և ազգանունը պարտադիր են"
SHORT_NAME_MESSAGE = "Name must be at least 2 characters / Անունը պետք է լինել առնվազն 2 սիմվոլ"

# Fields that go through the ligature substitution
_FREE_TEXT_FIELDS = (
    "first_name",
    "last_name",
    "middle_name",
    "region",
    "community",
    "street",
    "building",
    "apartment",
    "district",
)


@dataclass(frozen=True)
class SearchParams:
    first_name: str
    last_name: str
    middle_name: str = ""
    birth_date: str = ""  # DD/MM/YYYY as typed by the user
    region: str = DEFAULT_REGION
    community: str = ""
    street: str = ""
    building: str = ""
    apartment: str = ""
    district: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SearchParams":
        """Build params from an API payload; None and missing keys become ""."""
        known = {f.name for f in fields(cls)}
        values = {k: str(v) if v is not None else "" for k, v in data.items() if k in known}
        values.setdefault("first_name", "")
        values.setdefault("last_name", "")
        return cls(**values)

    def normalized(self) -> "SearchParams":
        changes = {}
        for name in _FREE_TEXT_FIELDS:
            value = (getattr(self, name) or "").strip()
            changes[name] = normalize_armenian_text(value)
        if not changes["region"]:
            changes["region"] = DEFAULT_REGION
        changes["birth_date"] = (self.birth_date or "").strip()
        return replace(self, **changes)

    def validate(self) -> None:
        if not self.first_name or not self.last_name:
            raise ValidationError(MISSING_NAME_MESSAGE)
        if len(self.first_name) < MIN_NAME_LENGTH or len(self.last_name) < MIN_NAME_LENGTH:
            raise ValidationError(SHORT_NAME_MESSAGE)

    @property
    def iso_birth_date(self) -> str:
        return convert_date_format(self.birth_date)

    @property
    def has_address(self) -> bool:
        """Address-qualified searches are narrow enough for a single page."""
        return bool(self.street or self.building or self.apartment)

"""Domain value objects for the product catalogue."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from enum import Enum
from typing import Any, Dict, List, Optional

from .dates import format_input_date, parse_date

PRODUCT_FIELDS: tuple[str, ...] = (
    "id",
    "name",
    "description",
    "logo",
    "date_release",
    "date_revision",
)


@dataclass(frozen=True)
class FinancialProduct:
    """One catalogue entry.  ``id`` is the identity; the remote store owns it."""

    id: str
    name: str
    description: str
    logo: str
    date_release: Optional[date] = None
    date_revision: Optional[date] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> FinancialProduct:
        return cls(
            id=str(data.get("id", "")),
            name=str(data.get("name", "")),
            description=str(data.get("description", "")),
            logo=str(data.get("logo", "")),
            date_release=parse_date(data.get("date_release")),
            date_revision=parse_date(data.get("date_revision")),
        )

    def to_payload(self, include_id: bool = True) -> Dict[str, Any]:
        payload = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "logo": self.logo,
            "date_release": format_input_date(self.date_release),
            "date_revision": format_input_date(self.date_revision),
        }
        if not include_id:
            del payload["id"]
        return payload


@dataclass(frozen=True)
class SearchCriteria:
    """The search term as the user typed it.  Matching normalises it later."""

    search_term: str = ""

    @property
    def normalised_term(self) -> str:
        return self.search_term.strip().lower()

    @property
    def is_active(self) -> bool:
        return bool(self.search_term.strip())


@dataclass(frozen=True)
class PaginationWindow:
    current_page: int = 1
    items_per_page: int = 5
    total_items: int = 0

    def merged(self, **changes: Any) -> PaginationWindow:
        """Return a copy with *changes* applied; ``None`` values are ignored."""
        return replace(self, **{k: v for k, v in changes.items() if v is not None})


@dataclass(frozen=True)
class ProjectionResult:
    """What the list should render right now.  Derived, never persisted."""

    filtered: List[FinancialProduct] = field(default_factory=list)
    displayed: List[FinancialProduct] = field(default_factory=list)
    is_loading: bool = False
    error_message: str = ""


class MutationKind(str, Enum):
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


@dataclass(frozen=True)
class PendingMutation:
    kind: MutationKind
    target_id: Optional[str] = None

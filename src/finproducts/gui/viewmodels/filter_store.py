"""Search criteria store and the matching rules that go with it."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Iterable, List, Optional

from finproducts.domain.models import FinancialProduct, SearchCriteria
from finproducts.gui.viewmodels.signal import StateStream

LOGGER = logging.getLogger(__name__)


def matches_search_term(product: FinancialProduct, search_term: str) -> bool:
    """Return ``True`` when *product* matches the (raw) *search_term*.

    The term is trimmed and case-folded here, at match time.  An empty term
    matches everything; otherwise name, description or id must contain it.
    """
    term = (search_term or "").strip().casefold()
    if not term:
        return True
    return any(
        term in (text or "").casefold()
        for text in (product.name, product.description, product.id)
    )


class FilterStore:
    """Single source of truth for the current :class:`SearchCriteria`.

    The stored term keeps the user's casing and whitespace so it can be
    redisplayed verbatim.
    """

    def __init__(self) -> None:
        self._stream: StateStream[SearchCriteria] = StateStream(SearchCriteria())

    # -- queries -----------------------------------------------------------

    def current(self) -> SearchCriteria:
        return self._stream.value

    def changes(self) -> StateStream[SearchCriteria]:
        """The replaying change stream (``subscribe()`` or ``async for``)."""
        return self._stream

    def has_active_filters(self) -> bool:
        return self.current().is_active

    # -- commands ----------------------------------------------------------

    def update_search_term(self, term: str) -> None:
        self.update_filters(search_term=term)

    def update_filters(self, **changes: Any) -> None:
        """Merge *changes* into the current criteria and emit the result."""
        criteria = replace(self.current(), **changes)
        LOGGER.debug("Search criteria -> %r", criteria.search_term)
        self._stream.emit(criteria)

    def clear(self) -> None:
        self._stream.emit(SearchCriteria())

    # -- helpers -------------------------------------------------------------

    def apply_filters(
        self,
        products: Iterable[FinancialProduct],
        criteria: Optional[SearchCriteria] = None,
    ) -> List[FinancialProduct]:
        term = (criteria or self.current()).search_term
        return [product for product in products if matches_search_term(product, term)]

    @staticmethod
    def filter_stats(original_count: int, filtered_count: int) -> Dict[str, Any]:
        return {
            "original_count": original_count,
            "filtered_count": filtered_count,
            "is_filtered": original_count != filtered_count,
        }

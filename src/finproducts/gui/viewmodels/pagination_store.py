"""Pagination window store.

Holds the current page, page size and total count, and derives page count,
navigation validity and the results label.  The store does not clamp
arbitrary writes; :class:`ProductListViewModel` keeps the window consistent
with the filtered result.
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, Sequence, TypeVar

from finproducts.config import (
    DEFAULT_CURRENT_PAGE,
    DEFAULT_ITEMS_PER_PAGE,
    PAGE_SIZE_OPTIONS,
)
from finproducts.domain.models import PaginationWindow
from finproducts.gui.viewmodels.signal import StateStream

LOGGER = logging.getLogger(__name__)

T = TypeVar("T")


def default_window(items_per_page: int = DEFAULT_ITEMS_PER_PAGE) -> PaginationWindow:
    return PaginationWindow(
        current_page=DEFAULT_CURRENT_PAGE,
        items_per_page=items_per_page,
        total_items=0,
    )


class PaginationStore:
    def __init__(
        self,
        items_per_page: int = DEFAULT_ITEMS_PER_PAGE,
        page_size_options: Sequence[int] = PAGE_SIZE_OPTIONS,
    ) -> None:
        if items_per_page <= 0:
            raise ValueError(f"items_per_page must be positive, got {items_per_page}")
        self._default_items_per_page = items_per_page
        self.page_size_options: tuple[int, ...] = tuple(page_size_options)
        self._stream: StateStream[PaginationWindow] = StateStream(default_window(items_per_page))

    # -- queries -----------------------------------------------------------

    def current(self) -> PaginationWindow:
        return self._stream.value

    def changes(self) -> StateStream[PaginationWindow]:
        return self._stream

    @staticmethod
    def total_pages(total_items: int, items_per_page: int) -> int:
        if total_items <= 0 or items_per_page <= 0:
            return 0
        return math.ceil(total_items / items_per_page)

    def has_next_page(self) -> bool:
        window = self.current()
        return window.current_page < self.total_pages(window.total_items, window.items_per_page)

    def has_previous_page(self) -> bool:
        return self.current().current_page > 1

    @staticmethod
    def page_items(items: Sequence[T], current_page: int, items_per_page: int) -> List[T]:
        """Slice *items* for *current_page*; out-of-range pages give ``[]``."""
        if current_page < 1 or items_per_page <= 0:
            return []
        start = (current_page - 1) * items_per_page
        return list(items[start:start + items_per_page])

    @staticmethod
    def results_label(count: int) -> str:
        if count == 1:
            return "1 Resultado"
        return f"{count} Resultados"

    # -- commands ----------------------------------------------------------

    def update(self, **changes: Any) -> None:
        """Merge *changes* (``current_page``, ``items_per_page``, ``total_items``)."""
        window = self.current().merged(**changes)
        LOGGER.debug("Pagination window -> %s", window)
        self._stream.emit(window)

    def next_page(self) -> None:
        if self.has_next_page():
            self.update(current_page=self.current().current_page + 1)

    def previous_page(self) -> None:
        if self.has_previous_page():
            self.update(current_page=self.current().current_page - 1)

    def set_items_per_page(self, items_per_page: int) -> None:
        """Change the page size; always returns to the first page."""
        if items_per_page <= 0:
            raise ValueError(f"items_per_page must be positive, got {items_per_page}")
        self.update(items_per_page=items_per_page, current_page=1)

    def reset(self) -> None:
        self._stream.emit(default_window(self._default_items_per_page))

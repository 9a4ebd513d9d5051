"""Product list ViewModel — the list projection engine.

Owns the raw catalogue and derives what the list renders from three
independently changing inputs: the loaded products, the search criteria in
:class:`FilterStore` and the window in :class:`PaginationStore`.

* A criteria change refilters and sends the list back to page 1.
* A window change only reslices the already-filtered products.
* ``reload()`` is tagged with a generation number; a response that is not
  from the latest generation is dropped instead of applied.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional

from finproducts.config import LOAD_ERROR_MESSAGE
from finproducts.domain.dates import format_display_date
from finproducts.domain.models import (
    FinancialProduct,
    PaginationWindow,
    ProjectionResult,
    SearchCriteria,
)
from finproducts.domain.repositories import IProductRepository
from finproducts.errors import TransportError
from finproducts.errors.handler import ErrorHandler, ErrorSeverity
from finproducts.events.bus import EventBus
from finproducts.events.product_events import ProductsLoadedEvent
from finproducts.gui.viewmodels.base import BaseViewModel
from finproducts.gui.viewmodels.filter_store import FilterStore
from finproducts.gui.viewmodels.pagination_store import PaginationStore
from finproducts.gui.viewmodels.signal import ObservableProperty, Signal


class LoadState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


class ProductListViewModel(BaseViewModel):
    """Searchable, paginated product list — pure Python, no Qt dependency."""

    def __init__(
        self,
        repository: IProductRepository,
        filter_store: FilterStore,
        pagination_store: PaginationStore,
        event_bus: Optional[EventBus] = None,
        error_handler: Optional[ErrorHandler] = None,
    ) -> None:
        super().__init__()
        self._repository = repository
        self._filters = filter_store
        self._pagination = pagination_store
        self._event_bus = event_bus
        self._error_handler = error_handler
        self._logger = logging.getLogger(__name__)

        self._raw_products: List[FinancialProduct] = []
        self._criteria: SearchCriteria = filter_store.current()
        self._window: PaginationWindow = pagination_store.current()
        self._generation = 0

        # Observable properties
        self.state = ObservableProperty(LoadState.IDLE)
        self.loading = ObservableProperty(False)
        self.error_message = ObservableProperty("")
        self.filtered = ObservableProperty([])
        self.displayed = ObservableProperty([])

        # Signals
        self.products_loaded = Signal()
        self.error_occurred = Signal()

        # Window first so the criteria replay below reslices against it.
        self.subscribe_stream(self._pagination.changes(), self._on_window_changed)
        self.subscribe_stream(self._filters.changes(), self._on_criteria_changed)

    # -- properties --------------------------------------------------------

    @property
    def raw_products(self) -> List[FinancialProduct]:
        return list(self._raw_products)

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def filter_store(self) -> FilterStore:
        return self._filters

    @property
    def pagination_store(self) -> PaginationStore:
        return self._pagination

    # -- loading -----------------------------------------------------------

    async def reload(self) -> None:
        """Fetch the catalogue and rebuild the projection.

        On failure the previous products stay in place and a fixed message is
        exposed through ``error_message``.
        """
        if self._disposed:
            return
        self._generation += 1
        generation = self._generation
        self.state.value = LoadState.LOADING
        self.loading.value = True
        self.error_message.value = ""

        try:
            products = await self._repository.list()
        except TransportError as exc:
            if not self._is_current(generation):
                self._logger.debug("Discarding failure of superseded load #%d", generation)
                return
            self._fail(exc)
            return

        if not self._is_current(generation):
            self._logger.debug("Discarding stale product list from load #%d", generation)
            return

        self._raw_products = list(products)
        self.state.value = LoadState.READY
        self.loading.value = False
        self._logger.info("Loaded %d products (load #%d)", len(self._raw_products), generation)
        self._refilter()

        self.products_loaded.emit(self.raw_products)
        if self._event_bus is not None:
            self._event_bus.publish(
                ProductsLoadedEvent(products=self.raw_products, generation=generation)
            )

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation and not self._disposed

    def _fail(self, exc: TransportError) -> None:
        if self._error_handler is not None:
            self._error_handler.handle(
                exc,
                ErrorSeverity.ERROR,
                user_message=LOAD_ERROR_MESSAGE,
                context={"operation": "list"},
            )
        else:
            self._logger.error("Error loading products: %s", exc)
        self.error_message.value = LOAD_ERROR_MESSAGE
        self.state.value = LoadState.FAILED
        self.loading.value = False
        self.error_occurred.emit(LOAD_ERROR_MESSAGE)

    # -- user intents ------------------------------------------------------

    def search(self, term: str) -> None:
        self._filters.update_search_term(term)

    def clear_filters(self) -> None:
        self._filters.clear()

    def change_items_per_page(self, items_per_page: int) -> None:
        self._pagination.set_items_per_page(items_per_page)

    def next_page(self) -> None:
        self._pagination.next_page()

    def previous_page(self) -> None:
        self._pagination.previous_page()

    # -- derived views -----------------------------------------------------

    def total_pages(self) -> int:
        return self._pagination.total_pages(self._window.total_items, self._window.items_per_page)

    def results_text(self) -> str:
        return self._pagination.results_label(len(self.displayed.value))

    def projection(self) -> ProjectionResult:
        return ProjectionResult(
            filtered=list(self.filtered.value),
            displayed=list(self.displayed.value),
            is_loading=self.loading.value,
            error_message=self.error_message.value,
        )

    @staticmethod
    def format_date(value) -> str:
        return format_display_date(value)

    # -- recompute ---------------------------------------------------------

    def _on_criteria_changed(self, criteria: SearchCriteria) -> None:
        if self._disposed:
            return
        self._criteria = criteria
        self._refilter()

    def _on_window_changed(self, window: PaginationWindow) -> None:
        if self._disposed:
            return
        self._window = window
        self._reslice()

    def _refilter(self) -> None:
        """Filter the raw products and restart the window at page 1.

        Pushing the new total into the pagination store re-enters
        ``_on_window_changed``, which reslices; ``filtered`` is set first.
        """
        filtered = self._filters.apply_filters(self._raw_products, self._criteria)
        self.filtered.value = filtered
        self._pagination.update(total_items=len(filtered), current_page=1)

    def _reslice(self) -> None:
        self.displayed.value = self._pagination.page_items(
            self.filtered.value,
            self._window.current_page,
            self._window.items_per_page,
        )

"""Application-wide context: builds and tears down the collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .domain.repositories import IProductRepository
from .errors.handler import ErrorHandler
from .events.bus import EventBus
from .gui.viewmodels.action_menu import ActionMenuState
from .gui.viewmodels.filter_store import FilterStore
from .gui.viewmodels.mutation_coordinator import MutationCoordinator
from .gui.viewmodels.pagination_store import PaginationStore
from .gui.viewmodels.product_form_viewmodel import ProductFormViewModel
from .gui.viewmodels.product_list_viewmodel import ProductListViewModel
from .settings.manager import SettingsManager
from .utils.logging import get_logger


def _create_settings_manager() -> SettingsManager:
    manager = SettingsManager()
    manager.load()
    return manager


@dataclass
class AppContext:
    """Container object shared by the CLI and GUI front ends."""

    settings: SettingsManager = field(default_factory=_create_settings_manager)
    repository: Optional[IProductRepository] = None
    event_bus: EventBus = field(default_factory=EventBus)

    def __post_init__(self) -> None:
        if self.repository is None:
            from .infrastructure.http_repository import HttpProductRepository

            self.repository = HttpProductRepository(
                base_url=self.settings.get("api.base_url"),
                timeout=self.settings.get("api.timeout"),
            )

        self.error_handler = ErrorHandler(get_logger(), self.event_bus)
        self.filters = FilterStore()
        self.pagination = PaginationStore(
            items_per_page=self.settings.get("ui.items_per_page"),
            page_size_options=self.settings.get("ui.page_size_options"),
        )
        self.product_list = ProductListViewModel(
            self.repository,
            self.filters,
            self.pagination,
            event_bus=self.event_bus,
            error_handler=self.error_handler,
        )
        self.mutations = MutationCoordinator(
            self.repository,
            self.product_list,
            event_bus=self.event_bus,
            error_handler=self.error_handler,
        )
        self.action_menu = ActionMenuState()

    def create_form(self) -> ProductFormViewModel:
        return ProductFormViewModel(self.mutations)

    async def aclose(self) -> None:
        """Release store subscriptions and the transport."""
        self.product_list.dispose()
        await self.repository.aclose()

    async def __aenter__(self) -> AppContext:
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

from .signal import ObservableProperty, Signal, StateStream, StreamSubscription
from .base import BaseViewModel
from .filter_store import FilterStore, matches_search_term
from .pagination_store import PaginationStore
from .product_list_viewmodel import LoadState, ProductListViewModel
from .mutation_coordinator import MutationCoordinator
from .product_form_viewmodel import ProductFormViewModel
from .action_menu import ActionMenuState

__all__ = [
    "ActionMenuState",
    "BaseViewModel",
    "FilterStore",
    "LoadState",
    "MutationCoordinator",
    "ObservableProperty",
    "PaginationStore",
    "ProductFormViewModel",
    "ProductListViewModel",
    "Signal",
    "StateStream",
    "StreamSubscription",
    "matches_search_term",
]

from .models import (
    FinancialProduct,
    MutationKind,
    PaginationWindow,
    PendingMutation,
    ProjectionResult,
    SearchCriteria,
)
from .repositories import IProductRepository

__all__ = [
    "FinancialProduct",
    "IProductRepository",
    "MutationKind",
    "PaginationWindow",
    "PendingMutation",
    "ProjectionResult",
    "SearchCriteria",
]

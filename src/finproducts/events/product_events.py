from dataclasses import dataclass, field
from typing import List

from finproducts.domain.models import FinancialProduct
from .bus import Event


@dataclass(kw_only=True)
class ProductsLoadedEvent(Event):
    products: List[FinancialProduct] = field(default_factory=list)
    generation: int = 0


@dataclass(kw_only=True)
class ProductCreatedEvent(Event):
    product: FinancialProduct


@dataclass(kw_only=True)
class ProductUpdatedEvent(Event):
    product: FinancialProduct


@dataclass(kw_only=True)
class ProductDeletedEvent(Event):
    product_id: str

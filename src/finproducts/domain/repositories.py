from abc import ABC, abstractmethod
from typing import Any, Dict, List

from .models import FinancialProduct


class IProductRepository(ABC):
    """Remote catalogue boundary.

    Every method raises :class:`~finproducts.errors.TransportError` when the
    store cannot be reached or answers with a non-2xx status.
    """

    @abstractmethod
    async def list(self) -> List[FinancialProduct]:
        """Fetch the whole catalogue"""
        pass

    @abstractmethod
    async def create(self, fields: Dict[str, Any]) -> FinancialProduct:
        """Create a product from validated form fields"""
        pass

    @abstractmethod
    async def update(self, product_id: str, fields: Dict[str, Any]) -> FinancialProduct:
        """Replace the fields of an existing product"""
        pass

    @abstractmethod
    async def delete(self, product_id: str) -> None:
        """Delete product by ID"""
        pass

    async def aclose(self) -> None:
        """Release transport resources, if any."""

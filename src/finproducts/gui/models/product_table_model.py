"""Qt table model for the product list.

Binds to :class:`ProductListViewModel.displayed` and resets itself whenever
the displayed page changes.  All state lives in the view-model; this class
only adapts it to Qt's item-model interface.

The package ships no window of its own; a host application embeds the
model in its view:

    ctx = AppContext()
    view.setModel(ProductTableModel(ctx.product_list))

Call :meth:`ProductTableModel.detach` before the view goes away.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any

from PySide6.QtCore import QAbstractTableModel, QModelIndex, QObject, Qt

from ...domain.dates import format_display_date
from ...domain.models import FinancialProduct
from ..viewmodels.product_list_viewmodel import ProductListViewModel


class ProductColumn(IntEnum):
    LOGO = 0
    NAME = 1
    DESCRIPTION = 2
    DATE_RELEASE = 3
    DATE_REVISION = 4


COLUMN_HEADERS: dict[ProductColumn, str] = {
    ProductColumn.LOGO: "Logo",
    ProductColumn.NAME: "Nombre del producto",
    ProductColumn.DESCRIPTION: "Descripción",
    ProductColumn.DATE_RELEASE: "Fecha de liberación",
    ProductColumn.DATE_REVISION: "Fecha de reestructuración",
}

ProductIdRole = Qt.ItemDataRole.UserRole + 1


class ProductTableModel(QAbstractTableModel):
    def __init__(self, view_model: ProductListViewModel, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._view_model = view_model
        self._rows: list[FinancialProduct] = list(view_model.displayed.value)
        self._view_model.displayed.changed.connect(self._on_displayed_changed)

    def rowCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802  # Qt override
        if parent.isValid():
            return 0
        return len(self._rows)

    def columnCount(self, parent: QModelIndex = QModelIndex()) -> int:  # noqa: N802  # Qt override
        if parent.isValid():
            return 0
        return len(ProductColumn)

    def data(self, index: QModelIndex, role: int = Qt.ItemDataRole.DisplayRole) -> Any:
        if not index.isValid() or not 0 <= index.row() < len(self._rows):
            return None
        product = self._rows[index.row()]
        if role == ProductIdRole:
            return product.id
        if role != Qt.ItemDataRole.DisplayRole:
            return None

        column = ProductColumn(index.column())
        if column is ProductColumn.LOGO:
            return product.logo
        if column is ProductColumn.NAME:
            return product.name
        if column is ProductColumn.DESCRIPTION:
            return product.description
        if column is ProductColumn.DATE_RELEASE:
            return format_display_date(product.date_release)
        return format_display_date(product.date_revision)

    def headerData(  # noqa: N802  # Qt override
        self,
        section: int,
        orientation: Qt.Orientation,
        role: int = Qt.ItemDataRole.DisplayRole,
    ) -> Any:
        if role != Qt.ItemDataRole.DisplayRole or orientation != Qt.Orientation.Horizontal:
            return None
        try:
            return COLUMN_HEADERS[ProductColumn(section)]
        except ValueError:
            return None

    def product_at(self, row: int) -> FinancialProduct | None:
        if 0 <= row < len(self._rows):
            return self._rows[row]
        return None

    def detach(self) -> None:
        """Stop following the view-model (call before the view is destroyed)."""
        try:
            self._view_model.displayed.changed.disconnect(self._on_displayed_changed)
        except ValueError:
            pass

    def _on_displayed_changed(self, new_value, _old_value) -> None:
        self.beginResetModel()
        self._rows = list(new_value)
        self.endResetModel()

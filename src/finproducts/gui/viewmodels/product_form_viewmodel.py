"""Add/edit product form state.

Tracks field values and which fields the user has touched.  Field errors are
only reported for touched fields, so a fresh form shows no errors.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from finproducts.domain.dates import default_revision_date, format_input_date
from finproducts.domain.models import PRODUCT_FIELDS, FinancialProduct
from finproducts.domain.validation import validate_product_fields
from finproducts.errors import ValidationError
from finproducts.gui.viewmodels.base import BaseViewModel
from finproducts.gui.viewmodels.mutation_coordinator import MutationCoordinator
from finproducts.gui.viewmodels.signal import ObservableProperty, Signal


def _empty_values() -> Dict[str, str]:
    return {name: "" for name in PRODUCT_FIELDS}


class ProductFormViewModel(BaseViewModel):
    def __init__(self, coordinator: MutationCoordinator) -> None:
        super().__init__()
        self._coordinator = coordinator
        self._logger = logging.getLogger(__name__)

        self.values = ObservableProperty(_empty_values())
        self.touched = ObservableProperty(frozenset())
        self.editing_id = ObservableProperty(None)
        self.is_submitting = ObservableProperty(False)

        self.submitted = Signal()  # emits the stored product

        coordinator.pending.changed.connect(self._on_pending_changed)

    # -- state -------------------------------------------------------------

    @property
    def is_edit_mode(self) -> bool:
        return self.editing_id.value is not None

    @property
    def errors(self) -> Dict[str, str]:
        return validate_product_fields(self.values.value)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def field_error(self, name: str) -> str:
        if name not in self.touched.value:
            return ""
        return self.errors.get(name, "")

    def is_field_invalid(self, name: str) -> bool:
        return bool(self.field_error(name))

    # -- editing -------------------------------------------------------------

    def set_value(self, name: str, value: Any) -> None:
        if name not in PRODUCT_FIELDS:
            raise KeyError(f"Unknown product field '{name}'")
        if name == "id" and self.is_edit_mode:
            return
        updated = dict(self.values.value)
        updated[name] = value
        self.values.value = updated

    def touch(self, name: str) -> None:
        self.touched.value = self.touched.value | {name}

    def touch_all(self) -> None:
        self.touched.value = frozenset(PRODUCT_FIELDS)

    def on_date_release_change(self, release: Any) -> None:
        """Store the release date and suggest a revision one year later.

        Only this event fills the revision date; the user may overwrite it.
        """
        self.set_value("date_release", release)
        revision = default_revision_date(release)
        if revision is not None:
            self.set_value("date_revision", format_input_date(revision))

    def load_product(self, product: FinancialProduct) -> None:
        """Fill the form from *product* for editing; the id is locked."""
        self.editing_id.value = None
        self.values.value = {
            "id": product.id,
            "name": product.name,
            "description": product.description,
            "logo": product.logo,
            "date_release": format_input_date(product.date_release),
            "date_revision": format_input_date(product.date_revision),
        }
        self.touched.value = frozenset()
        self.editing_id.value = product.id

    def reset(self) -> None:
        if self.is_edit_mode:
            kept = _empty_values()
            kept["id"] = self.editing_id.value
            self.values.value = kept
        else:
            self.values.value = _empty_values()
        self.touched.value = frozenset()

    # -- submission ----------------------------------------------------------

    async def submit(self) -> Optional[FinancialProduct]:
        """Send the form through the coordinator.

        Invalid input touches every field so all errors show and nothing is
        sent.  Returns the stored product or ``None``.
        """
        if not self.is_valid:
            self.touch_all()
            return None
        try:
            product = await self._coordinator.submit(self.values.value, self.editing_id.value)
        except ValidationError as exc:
            self._logger.debug("Form rejected: %s", exc)
            self.touch_all()
            return None
        if product is not None:
            self.submitted.emit(product)
        return product

    def _on_pending_changed(self, new_value, _old_value) -> None:
        self.is_submitting.value = new_value is not None

    def dispose(self) -> None:
        try:
            self._coordinator.pending.changed.disconnect(self._on_pending_changed)
        except ValueError:
            pass
        super().dispose()

"""Row action menu state for the product list.

Only one row's menu is open at a time.  The view forwards clicks outside the
menu to :meth:`ActionMenuState.handle_outside_click`.
"""

from __future__ import annotations

from typing import Optional

from finproducts.gui.viewmodels.signal import ObservableProperty


class ActionMenuState:
    def __init__(self) -> None:
        self.active_menu_id = ObservableProperty(None)

    def is_open(self, product_id: str) -> bool:
        return self.active_menu_id.value == product_id

    def open(self, product_id: str) -> None:
        self.active_menu_id.value = product_id

    def close(self) -> None:
        self.active_menu_id.value = None

    def toggle(self, product_id: str) -> None:
        if self.is_open(product_id):
            self.close()
        else:
            self.open(product_id)

    def handle_outside_click(self, target_menu_id: Optional[str] = None) -> None:
        """Close the open menu unless the click landed inside it."""
        if target_menu_id is None or target_menu_id != self.active_menu_id.value:
            self.close()

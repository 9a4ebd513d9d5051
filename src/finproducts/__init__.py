"""Searchable, paginated catalogue of financial products.

Most code should import from submodules such as:
    finproducts.domain
    finproducts.gui.viewmodels
    finproducts.infrastructure
"""

__all__: list[str] = []

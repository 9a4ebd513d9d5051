"""Default configuration values for finproducts."""

from __future__ import annotations

from typing import Final

# Remote catalogue endpoint.  ``list()`` answers with ``{"data": [...]}`` while
# the mutation endpoints accept and return the flat product shape.
DEFAULT_API_BASE_URL: Final[str] = "http://localhost:3002"
PRODUCTS_ENDPOINT: Final[str] = "/bp/products"
DEFAULT_REQUEST_TIMEOUT_SEC: Final[float] = 10.0

# ---------------------------------------------------------------------------
# List presentation
# ---------------------------------------------------------------------------

DEFAULT_CURRENT_PAGE: Final[int] = 1
DEFAULT_ITEMS_PER_PAGE: Final[int] = 5
PAGE_SIZE_OPTIONS: Final[tuple[int, ...]] = (5, 10, 20)

# Shown instead of the transport error when the list cannot be fetched.  The
# technical detail only goes to the log.
LOAD_ERROR_MESSAGE: Final[str] = (
    "Error al cargar los productos financieros. Por favor, intente nuevamente."
)
SAVE_ERROR_MESSAGE: Final[str] = "No se pudo guardar el producto. Intente nuevamente."
DELETE_ERROR_MESSAGE: Final[str] = "No se pudo eliminar el producto. Intente nuevamente."

DISPLAY_DATE_FORMAT: Final[str] = "%d/%m/%Y"
INPUT_DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Release and revision dates are one year apart unless the user says otherwise.
REVISION_OFFSET_YEARS: Final[int] = 1

"""Custom exception hierarchy for finproducts."""

from __future__ import annotations

from typing import Mapping, Optional


class FinProductsError(Exception):
    """Base class for all custom errors raised by finproducts."""


# --- 3-layer hierarchy ---

class DomainError(FinProductsError):
    """Base class for domain-level errors."""


class InfrastructureError(FinProductsError):
    """Base class for infrastructure-level errors."""


class ApplicationError(FinProductsError):
    """Base class for application-level errors."""


# --- Domain errors ---

class ValidationError(DomainError):
    """Raised when submitted product fields fail the declared rule set.

    ``field_errors`` maps each failing field to its user-facing message.
    """

    def __init__(self, field_errors: Mapping[str, str]) -> None:
        self.field_errors = dict(field_errors)
        fields = ", ".join(sorted(self.field_errors)) or "<none>"
        super().__init__(f"Invalid product fields: {fields}")


class ProductNotFoundError(DomainError):
    """Raised when the requested product cannot be located."""


# --- Infrastructure errors ---

class TransportError(InfrastructureError):
    """Raised when the remote catalogue cannot be reached or answers non-2xx."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


# --- Application errors ---

class ConcurrentMutationError(ApplicationError):
    """Raised when a mutation is requested while another one is in flight."""


# --- Settings ---

class SettingsError(FinProductsError):
    """Base class for settings related failures."""


class SettingsLoadError(SettingsError):
    """Raised when the settings file cannot be parsed or loaded."""


class SettingsValidationError(SettingsError):
    """Raised when settings data fails schema validation."""

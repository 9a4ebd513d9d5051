"""Presentation layer: pure-Python view-models and Qt adapters."""

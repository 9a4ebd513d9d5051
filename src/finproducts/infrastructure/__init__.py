from .http_repository import HttpProductRepository

__all__ = ["HttpProductRepository"]

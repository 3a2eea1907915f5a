from .exceptions import RepositoryError
from .product_repository import ProductRepository

__all__ = [
    "ProductRepository",
    "RepositoryError",
]

from .health import SystemHealth
from .product import ProductBase, ProductCreate, ProductRead, ProductUpdate

__all__ = [
    "ProductBase",
    "ProductCreate",
    "ProductRead",
    "ProductUpdate",
    "SystemHealth",
]

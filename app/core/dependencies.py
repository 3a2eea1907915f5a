from fastapi import Request

from app.repositories import ProductRepository


def get_product_repository(request: Request) -> ProductRepository:
    """Return the repository built once by ``create_app``."""

    return request.app.state.product_repository

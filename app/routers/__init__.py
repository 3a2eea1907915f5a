from fastapi import APIRouter

from . import health, product


def get_api_router() -> APIRouter:
    router = APIRouter()
    router.include_router(health.router)
    router.include_router(product.router)
    return router

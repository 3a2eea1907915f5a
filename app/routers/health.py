import logging

from fastapi import APIRouter, Depends

from app.core.dependencies import get_product_repository
from app.repositories import ProductRepository, RepositoryError
from app.schemas import SystemHealth

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health", response_model=SystemHealth)
def health_check(repository: ProductRepository = Depends(get_product_repository)):
    try:
        database_ok = repository.ping()
    except RepositoryError as exc:
        logger.warning("Database health check failed: %s", exc)
        database_ok = False
    return SystemHealth(status="ok" if database_ok else "degraded", database=database_ok)

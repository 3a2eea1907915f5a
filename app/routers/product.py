import logging

from fastapi import APIRouter, Depends

from app.core.dependencies import get_product_repository
from app.repositories import ProductRepository
from app.schemas import ProductCreate, ProductRead, ProductUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/product", tags=["product"])


@router.get("", response_model=list[ProductRead])
@router.get("/", response_model=list[ProductRead], include_in_schema=False)
def list_products(repository: ProductRepository = Depends(get_product_repository)):
    return repository.get_products()


# Declared before "/{product_id}" so "bycat" is not read as an id.
@router.get("/bycat/{category_id}", response_model=list[ProductRead])
def list_products_by_category(
    category_id: int,
    repository: ProductRepository = Depends(get_product_repository),
):
    return repository.get_products_by_category_id(category_id)


@router.get("/{product_id}", response_model=ProductRead | None)
def get_product(
    product_id: int,
    repository: ProductRepository = Depends(get_product_repository),
):
    return repository.get_product_by_id(product_id)


@router.post("", response_model=ProductRead)
@router.post("/", response_model=ProductRead, include_in_schema=False)
def create_product(
    payload: ProductCreate,
    repository: ProductRepository = Depends(get_product_repository),
):
    data = payload.model_dump()
    logger.info("Creating product: %s", data)
    return repository.create_product(data)


@router.put("", response_model=ProductRead | None)
@router.put("/", response_model=ProductRead | None, include_in_schema=False)
def update_product(
    payload: ProductUpdate,
    repository: ProductRepository = Depends(get_product_repository),
):
    data = payload.model_dump()
    logger.info("Updating product %s: %s", payload.id, data)
    return repository.update_product(data)


@router.delete("/{product_id}", response_model=bool)
def delete_product(
    product_id: int,
    repository: ProductRepository = Depends(get_product_repository),
):
    deleted = repository.delete_product(product_id)
    if not deleted:
        logger.info("Delete requested for missing product %s", product_id)
    return deleted

"""Parameterized SQL access to the ``products`` table.

Every statement is a fixed template. Values reach the database only through
named, typed bind parameters, never through string formatting.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, Mapping

from sqlalchemy import Integer, Numeric, String, bindparam, column, text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from .exceptions import RepositoryError

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = "id, category_id, product_name, product_description, product_stock, product_price"


def _product_columns():
    return (
        column("id", Integer),
        column("category_id", Integer),
        column("product_name", String),
        column("product_description", String),
        column("product_stock", Integer),
        column("product_price", Numeric(10, 2)),
    )


def _product_params(with_id: bool = False):
    params = [
        bindparam("category_id", type_=Integer),
        bindparam("product_name", type_=String),
        bindparam("product_description", type_=String),
        bindparam("product_stock", type_=Integer),
        bindparam("product_price", type_=Numeric(10, 2)),
    ]
    if with_id:
        params.insert(0, bindparam("id", type_=Integer))
    return params


SQL_SELECT_ALL = text(
    f"SELECT {PRODUCT_FIELDS} FROM products ORDER BY product_name ASC"
).columns(*_product_columns())

SQL_SELECT_BY_ID = (
    text(f"SELECT {PRODUCT_FIELDS} FROM products WHERE id = :id")
    .bindparams(bindparam("id", type_=Integer))
    .columns(*_product_columns())
)

SQL_SELECT_BY_CATID = (
    text(f"SELECT {PRODUCT_FIELDS} FROM products WHERE category_id = :category_id ORDER BY product_name ASC")
    .bindparams(bindparam("category_id", type_=Integer))
    .columns(*_product_columns())
)

# Followed by SQL_SELECT_BY_ID on the returned identity.
SQL_INSERT = (
    text(
        "INSERT INTO products (category_id, product_name, product_description, product_stock, product_price) "
        "VALUES (:category_id, :product_name, :product_description, :product_stock, :product_price) "
        "RETURNING id"
    )
    .bindparams(*_product_params())
    .columns(column("id", Integer))
)

SQL_UPDATE = text(
    "UPDATE products SET category_id = :category_id, product_name = :product_name, "
    "product_description = :product_description, product_stock = :product_stock, "
    "product_price = :product_price WHERE id = :id"
).bindparams(*_product_params(with_id=True))

SQL_DELETE = text("DELETE FROM products WHERE id = :id").bindparams(bindparam("id", type_=Integer))

SQL_PING = text("SELECT 1")


class ProductRepository:
    """CRUD operations for products over a shared connection pool."""

    def __init__(self, engine: Engine):
        self.engine = engine

    def get_products(self) -> list[dict[str, Any]]:
        with self._unit_of_work("get all products") as conn:
            rows = conn.execute(SQL_SELECT_ALL).mappings().all()
        logger.debug("Fetched %d products", len(rows))
        return [dict(row) for row in rows]

    def get_product_by_id(self, product_id: int) -> dict[str, Any] | None:
        with self._unit_of_work("get product by id") as conn:
            row = conn.execute(SQL_SELECT_BY_ID, {"id": product_id}).mappings().first()
        return dict(row) if row else None

    def get_products_by_category_id(self, category_id: int) -> list[dict[str, Any]]:
        with self._unit_of_work("get products by category id") as conn:
            rows = conn.execute(SQL_SELECT_BY_CATID, {"category_id": category_id}).mappings().all()
        return [dict(row) for row in rows]

    def create_product(self, product: Mapping[str, Any]) -> dict[str, Any]:
        """Insert ``product`` and return the stored row, including its new id."""
        with self._unit_of_work("insert product") as conn:
            new_id = conn.execute(SQL_INSERT, self._bind_fields(product)).scalar_one()
            row = conn.execute(SQL_SELECT_BY_ID, {"id": new_id}).mappings().one()
        return dict(row)

    def update_product(self, product: Mapping[str, Any]) -> dict[str, Any] | None:
        """Overwrite every mutable field of the row matching ``product["id"]``.

        Returns the row as re-read after the update, or ``None`` when no row
        has that id.
        """
        params = self._bind_fields(product)
        params["id"] = product["id"]
        with self._unit_of_work("update product") as conn:
            conn.execute(SQL_UPDATE, params)
            row = conn.execute(SQL_SELECT_BY_ID, {"id": product["id"]}).mappings().first()
        return dict(row) if row else None

    def delete_product(self, product_id: int) -> bool:
        with self._unit_of_work("delete product") as conn:
            rows_affected = conn.execute(SQL_DELETE, {"id": product_id}).rowcount
        return rows_affected > 0

    def ping(self) -> bool:
        with self._unit_of_work("ping") as conn:
            conn.execute(SQL_PING)
        return True

    @contextmanager
    def _unit_of_work(self, operation: str) -> Iterator[Connection]:
        try:
            with self.engine.begin() as conn:
                yield conn
        except SQLAlchemyError as exc:
            detail = getattr(exc, "orig", None) or exc
            logger.exception("DB Error - %s", operation)
            raise RepositoryError(operation, f"DB Error - {operation}: {detail}") from exc

    @staticmethod
    def _bind_fields(product: Mapping[str, Any]) -> dict[str, Any]:
        return {
            "category_id": product["category_id"],
            "product_name": product["product_name"],
            "product_description": product.get("product_description"),
            "product_stock": product["product_stock"],
            "product_price": product["product_price"],
        }

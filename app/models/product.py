from decimal import Decimal

from sqlalchemy import DECIMAL, ForeignKey, Integer, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base


class Product(Base):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    category_id: Mapped[int] = mapped_column(ForeignKey("categories.id"), index=True)
    product_name: Mapped[str] = mapped_column(String(255), index=True)
    product_description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    product_stock: Mapped[int] = mapped_column(Integer, default=0)
    product_price: Mapped[Decimal] = mapped_column(DECIMAL(10, 2))

    category: Mapped["Category"] = relationship("Category", back_populates="products")

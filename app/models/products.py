# app/models/products.py

from sqlalchemy import CheckConstraint, Column, Index, Integer, String, Numeric, ForeignKey, DateTime
from sqlalchemy.sql import func

from app.database import Base, generate_id, utcnow


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_id)

    # Always written as the owner of shop_id
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False)
    shop_id = Column(String(36), ForeignKey("shops.id"), nullable=False)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=False)
    brand_id = Column(String(36), ForeignKey("brands.id"), nullable=False)

    name = Column(String, nullable=False)
    description = Column(String(255), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    stock = Column(Integer, nullable=False, default=0)

    # Python-side default keeps sub-second ordering for "newest first"
    created_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, server_default=func.now(), nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("ix_products_user_created", "user_id", "created_at"),
        Index("ix_products_shop_id", "shop_id"),
        Index("ix_products_category_id", "category_id"),
        Index("ix_products_brand_id", "brand_id"),
        CheckConstraint("price >= 0", name="ck_product_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_product_stock_non_negative"),
    )

# =========================================================
# PRODUCT REPOSITORY
#
# - Listing query built from optional filters (bound params only)
# - Window count so one query yields both the page and its total
# - Ownership checks used by the service before any mutation
# =========================================================

import logging

from sqlalchemy import and_, exists, func, or_, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.pagination import clamp_paging, page_offset
from app.database import utcnow
from app.models.catalog import Brand, Category
from app.models.products import Product
from app.models.reviews import Review
from app.models.shops import Shop
from app.repositories.shops import shop_ownership_query
from app.schemas.product import (
    BrandSummary,
    CategorySummary,
    ProductCreate,
    ProductFilter,
    ProductItem,
    ProductUpdate,
    ShopSummary,
)


def rating_expression():
    """Average review rating rounded to one decimal, 0.0 without reviews."""
    average = (
        select(func.round(func.avg(Review.rating), 1))
        .where(Review.product_id == Product.id)
        .correlate(Product)
        .scalar_subquery()
    )

    return func.coalesce(average, 0.0)


def _product_columns():
    return (
        Product.id,
        Product.name,
        Product.description,
        Product.price,
        Product.stock,
        Product.user_id,
        Shop.id.label("shop_id"),
        Shop.name.label("shop_name"),
        Shop.description.label("shop_description"),
        Shop.terms.label("shop_terms"),
        Category.id.label("category_id"),
        Category.name.label("category_name"),
        Brand.id.label("brand_id"),
        Brand.name.label("brand_name"),
        rating_expression().label("rating"),
    )


def _joined(stmt):
    # Products whose shop is soft-deleted drop out with the join
    return (
        stmt
        .join(Shop, and_(Product.shop_id == Shop.id, Shop.deleted_at.is_(None)))
        .join(Category, Product.category_id == Category.id)
        .join(Brand, Product.brand_id == Brand.id)
    )


def filter_predicates(criteria: ProductFilter) -> list:
    predicates = [
        Product.user_id == criteria.user_id,
        Product.deleted_at.is_(None),
    ]

    if criteria.category_ids:
        predicates.append(Category.id.in_(criteria.category_ids))

    if criteria.brand_ids:
        predicates.append(Brand.id.in_(criteria.brand_ids))

    if criteria.min_price is not None:
        predicates.append(Product.price >= criteria.min_price)

    if criteria.max_price is not None:
        predicates.append(Product.price <= criteria.max_price)

    if criteria.min_rating > 0:
        predicates.append(rating_expression() >= criteria.min_rating)

    if criteria.search_query:
        # icontains escapes % and _ so user input only ever matches literally
        predicates.append(
            or_(
                Product.name.icontains(criteria.search_query, autoescape=True),
                Product.description.icontains(criteria.search_query, autoescape=True),
            )
        )

    if criteria.is_available:
        predicates.append(Product.stock > 0)

    return predicates


def build_products_query(criteria: ProductFilter):
    page, paginate = clamp_paging(criteria.page, criteria.paginate)

    stmt = select(
        func.count(Product.id).over().label("total_data"),
        *_product_columns(),
    )

    return (
        _joined(stmt)
        .where(*filter_predicates(criteria))
        .order_by(Product.created_at.desc(), Product.id.desc())
        .limit(paginate)
        .offset(page_offset(page, paginate))
    )


def build_products_count_query(criteria: ProductFilter):
    return _joined(select(func.count(Product.id))).where(*filter_predicates(criteria))


def row_to_item(row) -> ProductItem:
    return ProductItem(
        id=row.id,
        name=row.name,
        description=row.description,
        price=float(row.price),
        stock=row.stock,
        user_id=row.user_id,
        rating=float(row.rating or 0),
        shop=ShopSummary(
            id=row.shop_id,
            name=row.shop_name,
            description=row.shop_description,
            terms=row.shop_terms,
        ),
        category=CategorySummary(id=row.category_id, name=row.category_name),
        brand=BrandSummary(id=row.brand_id, name=row.brand_name),
    )


class ProductRepository:
    def __init__(self, db: Session, logger: logging.Logger | None = None):
        self.db = db
        self.logger = logger or logging.getLogger("app.repositories.products")

    def get_products(self, criteria: ProductFilter) -> tuple[list[ProductItem], int]:
        try:
            rows = self.db.execute(build_products_query(criteria)).all()

            if rows:
                total_data = rows[0].total_data
            elif criteria.page > 1:
                # Past the last page the window count is empty too
                total_data = self.db.execute(build_products_count_query(criteria)).scalar_one()
            else:
                total_data = 0

        except SQLAlchemyError:
            self.logger.exception(
                f"repository::get_products - Failed to get products (payload={criteria.model_dump()})"
            )
            raise

        return [row_to_item(row) for row in rows], total_data

    def get_product(self, product_id: str) -> ProductItem | None:
        stmt = _joined(select(*_product_columns())).where(
            Product.id == product_id,
            Product.deleted_at.is_(None),
        )

        try:
            row = self.db.execute(stmt).first()
        except SQLAlchemyError:
            self.logger.exception(f"repository::get_product - Failed to get product {product_id}")
            raise

        return row_to_item(row) if row else None

    def create_product(self, user_id: str, data: ProductCreate) -> str:
        product = Product(
            user_id=user_id,
            shop_id=data.shop_id,
            category_id=data.category_id,
            brand_id=data.brand_id,
            name=data.name,
            description=data.description,
            price=data.price,
            stock=data.stock,
        )

        self.db.add(product)
        self.db.flush()

        return product.id

    def update_product(self, product_id: str, user_id: str, data: ProductUpdate) -> int:
        """Replace the mutable fields; returns the number of rows touched."""
        stmt = (
            update(Product)
            .where(
                Product.id == product_id,
                Product.user_id == user_id,
                Product.deleted_at.is_(None),
            )
            .values(
                shop_id=data.shop_id,
                category_id=data.category_id,
                brand_id=data.brand_id,
                name=data.name,
                description=data.description,
                price=data.price,
                stock=data.stock,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )

        return self.db.execute(stmt).rowcount

    def delete_product(self, product_id: str, user_id: str) -> int:
        stmt = (
            update(Product)
            .where(
                Product.id == product_id,
                Product.user_id == user_id,
                Product.deleted_at.is_(None),
            )
            .values(deleted_at=utcnow())
            .execution_options(synchronize_session=False)
        )

        return self.db.execute(stmt).rowcount

    def is_shop_owner(self, user_id: str, shop_id: str) -> bool:
        try:
            return bool(self.db.scalar(shop_ownership_query(user_id, shop_id)))
        except SQLAlchemyError:
            self.logger.exception(
                f"repository::is_shop_owner failed (user_id={user_id}, shop_id={shop_id})"
            )
            raise

    def is_product_owner(self, user_id: str, product_id: str) -> bool:
        # Owner is resolved through the shop; the product's soft-delete
        # marker is not checked so a repeated delete still passes
        stmt = select(
            exists().where(
                Product.id == product_id,
                Product.shop_id == Shop.id,
                Shop.user_id == user_id,
            )
        )

        try:
            return bool(self.db.scalar(stmt))
        except SQLAlchemyError:
            self.logger.exception(
                f"repository::is_product_owner failed (user_id={user_id}, product_id={product_id})"
            )
            raise

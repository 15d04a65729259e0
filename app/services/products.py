# =========================================================
# PRODUCT SERVICE
#
# - Listing is scoped to the requesting user's products
# - Single product reads are public
# - Every mutation passes an ownership check first; a failed
#   check is reported as forbidden whether the resource is
#   missing or belongs to someone else
# =========================================================

import logging

from app.core.errors import forbidden, not_found
from app.core.pagination import build_meta, clamp_paging
from app.database import transaction
from app.repositories.products import ProductRepository
from app.schemas.common import IdResponse
from app.schemas.product import (
    ProductCreate,
    ProductFilter,
    ProductItem,
    ProductsResponse,
    ProductUpdate,
)


class ProductService:
    def __init__(self, repo: ProductRepository, logger: logging.Logger):
        self.repo = repo
        self.logger = logger

    def get_products(self, criteria: ProductFilter) -> ProductsResponse:
        page, paginate = clamp_paging(criteria.page, criteria.paginate)
        criteria = criteria.model_copy(update={"page": page, "paginate": paginate})

        items, total_data = self.repo.get_products(criteria)

        if not items:
            self.logger.info(f"service::get_products - No products matched (user_id={criteria.user_id})")

        return ProductsResponse(
            items=items,
            meta=build_meta(page, paginate, total_data),
        )

    def get_product(self, product_id: str) -> ProductItem:
        product = self.repo.get_product(product_id)

        if product is None:
            raise not_found("Product not found")

        return product

    def create_product(self, user_id: str, data: ProductCreate) -> IdResponse:
        if not self.repo.is_shop_owner(user_id, data.shop_id):
            self.logger.warning(f"service::create_product - User {user_id} is not owner of shop {data.shop_id}")
            raise forbidden("User is not shop owner")

        with transaction(self.repo.db):
            product_id = self.repo.create_product(user_id, data)

        self.logger.info(f"Product {product_id} created in shop {data.shop_id}")

        return IdResponse(id=product_id)

    def update_product(self, user_id: str, product_id: str, data: ProductUpdate) -> IdResponse:
        if not self.repo.is_product_owner(user_id, product_id):
            self.logger.warning(f"service::update_product - User {user_id} is not owner of product {product_id}")
            raise forbidden("User is not product owner")

        # Moving a product is only allowed into another shop of the same owner
        if not self.repo.is_shop_owner(user_id, data.shop_id):
            self.logger.warning(f"service::update_product - User {user_id} is not owner of shop {data.shop_id}")
            raise forbidden("User is not shop owner")

        with transaction(self.repo.db):
            updated = self.repo.update_product(product_id, user_id, data)

        if not updated:
            raise not_found("Product not found")

        return IdResponse(id=product_id)

    def delete_product(self, user_id: str, product_id: str) -> None:
        if not self.repo.is_product_owner(user_id, product_id):
            self.logger.warning(f"service::delete_product - User {user_id} is not owner of product {product_id}")
            raise forbidden("User is not product owner")

        with transaction(self.repo.db):
            deleted = self.repo.delete_product(product_id, user_id)

        if not deleted:
            self.logger.info(f"service::delete_product - Product {product_id} was already deleted")

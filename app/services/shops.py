# app/services/shops.py

import logging

from app.core.errors import forbidden, not_found
from app.core.pagination import build_meta, clamp_paging
from app.database import transaction
from app.repositories.shops import ShopRepository
from app.schemas.common import IdResponse
from app.schemas.shop import ShopCreate, ShopResponse, ShopsResponse, ShopUpdate


class ShopService:
    def __init__(self, repo: ShopRepository, logger: logging.Logger):
        self.repo = repo
        self.logger = logger

    def create_shop(self, user_id: str, data: ShopCreate) -> IdResponse:
        with transaction(self.repo.db):
            shop_id = self.repo.create_shop(user_id, data)

        self.logger.info(f"Shop {shop_id} created by user {user_id}")

        return IdResponse(id=shop_id)

    def get_shop(self, shop_id: str) -> ShopResponse:
        shop = self.repo.get_shop(shop_id)

        if shop is None:
            raise not_found("Shop not found")

        return ShopResponse.model_validate(shop)

    def get_shops(self, user_id: str, page: int, paginate: int) -> ShopsResponse:
        page, paginate = clamp_paging(page, paginate)
        items, total_data = self.repo.get_shops(user_id, page, paginate)

        return ShopsResponse(items=items, meta=build_meta(page, paginate, total_data))

    def update_shop(self, user_id: str, shop_id: str, data: ShopUpdate) -> IdResponse:
        if not self.repo.is_shop_owner(user_id, shop_id):
            self.logger.warning(f"service::update_shop - User {user_id} is not owner of shop {shop_id}")
            raise forbidden("User is not shop owner")

        with transaction(self.repo.db):
            updated = self.repo.update_shop(shop_id, user_id, data)

        if not updated:
            raise not_found("Shop not found")

        return IdResponse(id=shop_id)

    def delete_shop(self, user_id: str, shop_id: str) -> None:
        if not self.repo.is_shop_owner(user_id, shop_id):
            self.logger.warning(f"service::delete_shop - User {user_id} is not owner of shop {shop_id}")
            raise forbidden("User is not shop owner")

        with transaction(self.repo.db):
            self.repo.delete_shop(shop_id, user_id)

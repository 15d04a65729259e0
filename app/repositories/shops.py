# app/repositories/shops.py

import logging

from sqlalchemy import exists, func, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.pagination import clamp_paging, page_offset
from app.database import utcnow
from app.models.shops import Shop
from app.schemas.shop import ShopCreate, ShopItem, ShopUpdate


def shop_ownership_query(user_id: str, shop_id: str):
    return select(
        exists().where(
            Shop.id == shop_id,
            Shop.user_id == user_id,
            Shop.deleted_at.is_(None),
        )
    )


class ShopRepository:
    def __init__(self, db: Session, logger: logging.Logger | None = None):
        self.db = db
        self.logger = logger or logging.getLogger("app.repositories.shops")

    def create_shop(self, user_id: str, data: ShopCreate) -> str:
        shop = Shop(
            user_id=user_id,
            name=data.name,
            description=data.description,
            terms=data.terms,
        )

        self.db.add(shop)
        self.db.flush()

        return shop.id

    def get_shop(self, shop_id: str) -> Shop | None:
        try:
            return self.db.scalar(
                select(Shop).where(Shop.id == shop_id, Shop.deleted_at.is_(None))
            )
        except SQLAlchemyError:
            self.logger.exception(f"repository::get_shop - Failed to get shop {shop_id}")
            raise

    def get_shops(self, user_id: str, page: int, paginate: int) -> tuple[list[ShopItem], int]:
        page, paginate = clamp_paging(page, paginate)

        stmt = (
            select(
                func.count(Shop.id).over().label("total_data"),
                Shop.id,
                Shop.name,
            )
            .where(Shop.user_id == user_id, Shop.deleted_at.is_(None))
            .order_by(Shop.created_at.desc(), Shop.id.desc())
            .limit(paginate)
            .offset(page_offset(page, paginate))
        )

        try:
            rows = self.db.execute(stmt).all()

            if rows:
                total_data = rows[0].total_data
            elif page > 1:
                total_data = self.db.scalar(
                    select(func.count(Shop.id)).where(
                        Shop.user_id == user_id,
                        Shop.deleted_at.is_(None),
                    )
                )
            else:
                total_data = 0

        except SQLAlchemyError:
            self.logger.exception(f"repository::get_shops - Failed to get shops for user {user_id}")
            raise

        return [ShopItem(id=row.id, name=row.name) for row in rows], total_data

    def update_shop(self, shop_id: str, user_id: str, data: ShopUpdate) -> int:
        stmt = (
            update(Shop)
            .where(
                Shop.id == shop_id,
                Shop.user_id == user_id,
                Shop.deleted_at.is_(None),
            )
            .values(
                name=data.name,
                description=data.description,
                terms=data.terms,
                updated_at=utcnow(),
            )
            .execution_options(synchronize_session=False)
        )

        return self.db.execute(stmt).rowcount

    def delete_shop(self, shop_id: str, user_id: str) -> int:
        stmt = (
            update(Shop)
            .where(
                Shop.id == shop_id,
                Shop.user_id == user_id,
                Shop.deleted_at.is_(None),
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

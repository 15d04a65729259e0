# app/routers/shops.py

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.core import response
from app.core.auth import get_user_id
from app.core.pagination import DEFAULT_PAGINATE, MAX_PAGE, MAX_PAGINATE
from app.dependencies import get_shop_service
from app.schemas.shop import ShopCreate, ShopUpdate
from app.services.shops import ShopService

router = APIRouter(
    prefix="/shops",
    tags=["Shops"],
)


@router.get("")
def list_shops(
    page: int = Query(1, le=MAX_PAGE),
    paginate: int = Query(DEFAULT_PAGINATE, le=MAX_PAGINATE),
    user_id: str = Depends(get_user_id),
    service: ShopService = Depends(get_shop_service),
):
    return response.success(service.get_shops(user_id, page, paginate))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_shop(
    shop_data: ShopCreate,
    user_id: str = Depends(get_user_id),
    service: ShopService = Depends(get_shop_service),
):
    return response.success(service.create_shop(user_id, shop_data))


@router.get("/{shop_id}")
def get_shop(
    shop_id: UUID,
    service: ShopService = Depends(get_shop_service),
):
    return response.success(service.get_shop(str(shop_id)))


@router.patch("/{shop_id}")
def update_shop(
    shop_id: UUID,
    shop_data: ShopUpdate,
    user_id: str = Depends(get_user_id),
    service: ShopService = Depends(get_shop_service),
):
    return response.success(service.update_shop(user_id, str(shop_id), shop_data))


@router.delete("/{shop_id}")
def delete_shop(
    shop_id: UUID,
    user_id: str = Depends(get_user_id),
    service: ShopService = Depends(get_shop_service),
):
    service.delete_shop(user_id, str(shop_id))
    return response.success(None)

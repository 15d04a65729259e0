# app/routers/products.py

from decimal import Decimal
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from app.core import response
from app.core.auth import get_user_id
from app.core.pagination import DEFAULT_PAGINATE, MAX_PAGE, MAX_PAGINATE
from app.dependencies import get_product_service
from app.schemas.product import ProductCreate, ProductFilter, ProductUpdate
from app.services.products import ProductService

router = APIRouter(
    prefix="/products",
    tags=["Products"],
)


@router.get("")
def list_products(
    page: int = Query(1, le=MAX_PAGE),
    paginate: int = Query(DEFAULT_PAGINATE, le=MAX_PAGINATE),
    category_id: list[UUID] = Query([]),
    category_ids: list[UUID] = Query([]),
    brand_id: list[UUID] = Query([]),
    brand_ids: list[UUID] = Query([]),
    min_price: Decimal | None = Query(None, ge=0),
    max_price: Decimal | None = Query(None, ge=0),
    min_rating: float = Query(0, ge=0, le=5),
    search_query: str | None = Query(None, min_length=3, max_length=255),
    is_available: bool = False,
    user_id: str = Depends(get_user_id),
    service: ProductService = Depends(get_product_service),
):
    criteria = ProductFilter(
        user_id=user_id,
        page=page,
        paginate=paginate,
        category_ids=[str(i) for i in [*category_id, *category_ids]],
        brand_ids=[str(i) for i in [*brand_id, *brand_ids]],
        min_price=min_price,
        max_price=max_price,
        min_rating=min_rating,
        search_query=search_query,
        is_available=is_available,
    )

    return response.success(service.get_products(criteria))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_product(
    product_data: ProductCreate,
    user_id: str = Depends(get_user_id),
    service: ProductService = Depends(get_product_service),
):
    return response.success(service.create_product(user_id, product_data))


# Public read: no X-USER-ID required
@router.get("/{product_id}")
def get_product(
    product_id: UUID,
    service: ProductService = Depends(get_product_service),
):
    return response.success(service.get_product(str(product_id)))


@router.patch("/{product_id}")
def update_product(
    product_id: UUID,
    product_data: ProductUpdate,
    user_id: str = Depends(get_user_id),
    service: ProductService = Depends(get_product_service),
):
    return response.success(service.update_product(user_id, str(product_id), product_data))


@router.delete("/{product_id}")
def delete_product(
    product_id: UUID,
    user_id: str = Depends(get_user_id),
    service: ProductService = Depends(get_product_service),
):
    service.delete_product(user_id, str(product_id))
    return response.success(None)

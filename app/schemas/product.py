from decimal import Decimal
from pydantic import BaseModel, Field, field_validator

from app.core.pagination import DEFAULT_PAGINATE, MAX_PAGE, MAX_PAGINATE, Meta
from app.schemas.common import validate_uuid


class ProductFilter(BaseModel):
    """Listing criteria; every optional field left as None adds no predicate."""

    user_id: str
    page: int = Field(1, le=MAX_PAGE)
    paginate: int = Field(DEFAULT_PAGINATE, le=MAX_PAGINATE)
    category_ids: list[str] = Field(default_factory=list)
    brand_ids: list[str] = Field(default_factory=list)
    min_price: Decimal | None = Field(None, ge=0)
    max_price: Decimal | None = Field(None, ge=0)
    min_rating: float = Field(0, ge=0, le=5)
    search_query: str | None = Field(None, min_length=3, max_length=255)
    is_available: bool = False


class ProductCreate(BaseModel):
    shop_id: str
    category_id: str
    brand_id: str
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=255)
    price: Decimal = Field(..., ge=0, lt=10_000_000_000)
    stock: int = Field(..., ge=0)

    @field_validator("shop_id", "category_id", "brand_id")
    @classmethod
    def _validate_uuid(cls, value: str) -> str:
        return validate_uuid(value)


class ProductUpdate(ProductCreate):
    """Full replace of every mutable field."""


class ShopSummary(BaseModel):
    id: str
    name: str
    description: str
    terms: str


class CategorySummary(BaseModel):
    id: str
    name: str


class BrandSummary(BaseModel):
    id: str
    name: str


class ProductItem(BaseModel):
    id: str
    name: str
    description: str
    price: float
    stock: int
    user_id: str
    rating: float
    shop: ShopSummary
    category: CategorySummary
    brand: BrandSummary


class ProductsResponse(BaseModel):
    items: list[ProductItem]
    meta: Meta

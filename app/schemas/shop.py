from pydantic import BaseModel, Field

from app.core.pagination import Meta


class ShopCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1, max_length=255)
    terms: str = Field(..., min_length=1)


class ShopUpdate(ShopCreate):
    pass


class ShopResponse(BaseModel):
    id: str
    name: str
    description: str
    terms: str

    class Config:
        from_attributes = True


class ShopItem(BaseModel):
    id: str
    name: str

    class Config:
        from_attributes = True


class ShopsResponse(BaseModel):
    items: list[ShopItem]
    meta: Meta

# Importing the models registers them on Base.metadata
from app.models.users import Role, User
from app.models.shops import Shop
from app.models.catalog import Category, Brand
from app.models.products import Product
from app.models.reviews import Review

__all__ = ["Role", "User", "Shop", "Category", "Brand", "Product", "Review"]

# app/dependencies.py
# Services are assembled per request with their session and logger

import logging

from fastapi import Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.integrations.google_oauth import GoogleOAuthClient
from app.repositories.products import ProductRepository
from app.repositories.shops import ShopRepository
from app.repositories.users import UserRepository
from app.services.products import ProductService
from app.services.shops import ShopService
from app.services.users import UserService


def get_logger() -> logging.Logger:
    return logging.getLogger("app")


def get_google_client() -> GoogleOAuthClient:
    return GoogleOAuthClient.from_settings()


def get_product_service(
    db: Session = Depends(get_db),
    logger: logging.Logger = Depends(get_logger),
) -> ProductService:
    service_logger = logger.getChild("products")
    return ProductService(ProductRepository(db, service_logger), service_logger)


def get_shop_service(
    db: Session = Depends(get_db),
    logger: logging.Logger = Depends(get_logger),
) -> ShopService:
    service_logger = logger.getChild("shops")
    return ShopService(ShopRepository(db, service_logger), service_logger)


def get_user_service(
    db: Session = Depends(get_db),
    logger: logging.Logger = Depends(get_logger),
    oauth: GoogleOAuthClient = Depends(get_google_client),
) -> UserService:
    service_logger = logger.getChild("users")
    return UserService(UserRepository(db, service_logger), service_logger, oauth)

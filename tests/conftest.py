import os
from datetime import datetime, timedelta, timezone
from decimal import Decimal

os.environ["ENV"] = "test"
os.environ["SECRET_KEY"] = "test-secret-key"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import Session
from sqlalchemy.pool import StaticPool

from app.database import Base, get_db
from app.dependencies import get_google_client
from app.integrations.google_oauth import GoogleToken
from app.main import app
from app.models import Brand, Category, Product, Review, Role, Shop, User
from app.schemas.user import GoogleUserInfo
from app.seeds import seed_brands, seed_categories, seed_roles


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    session = Session(bind=engine, autoflush=False)

    seed_roles(session)
    seed_categories(session)
    seed_brands(session)
    session.commit()

    yield session

    session.close()


class FakeGoogleClient:
    """Stands in for Google: every code maps to a fixed profile."""

    def __init__(self):
        self.email = "google.user@example.com"
        self.verified = True
        self.exchanged = []

    def get_url(self, state):
        return f"https://accounts.google.com/o/oauth2/auth?state={state}"

    def exchange(self, code):
        self.exchanged.append(code)
        return GoogleToken(access_token="access-token", id_token="id-token")

    def verify_id_token(self, id_token, access_token=None):
        return {"email": self.email}

    def get_user_info(self, access_token):
        return GoogleUserInfo(email=self.email, verified_email=self.verified, name="Google User")


@pytest.fixture
def google():
    return FakeGoogleClient()


@pytest.fixture
def client(db, google):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_google_client] = lambda: google

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# ---------------- FACTORIES ----------------

@pytest.fixture
def category(db):
    return db.scalar(select(Category).where(Category.name == "Electronics"))


@pytest.fixture
def other_category(db):
    return db.scalar(select(Category).where(Category.name == "Books"))


@pytest.fixture
def brand(db):
    return db.scalar(select(Brand).where(Brand.name == "Acme"))


@pytest.fixture
def other_brand(db):
    return db.scalar(select(Brand).where(Brand.name == "Globex"))


@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make(email=None, name="Tester", password_hash="not-a-real-hash"):
        counter["n"] += 1
        role_id = db.scalar(select(Role.id).where(Role.name == "end_user"))
        user = User(
            role_id=role_id,
            email=email or f"user{counter['n']}@example.com",
            name=name,
            password_hash=password_hash,
        )
        db.add(user)
        db.commit()
        return user

    return _make


@pytest.fixture
def make_shop(db):
    def _make(user, name="Corner Shop", deleted=False):
        shop = Shop(
            user_id=user.id,
            name=name,
            description=f"{name} description",
            terms="No refunds",
            deleted_at=datetime.now(timezone.utc) if deleted else None,
        )
        db.add(shop)
        db.commit()
        return shop

    return _make


@pytest.fixture
def make_product(db, category, brand):
    base_time = datetime(2026, 1, 1, tzinfo=timezone.utc)
    counter = {"n": 0}

    def _make(
        shop,
        name="Widget",
        description="A useful widget",
        price="100.00",
        stock=5,
        category_id=None,
        brand_id=None,
        deleted=False,
    ):
        counter["n"] += 1
        product = Product(
            user_id=shop.user_id,
            shop_id=shop.id,
            category_id=category_id or category.id,
            brand_id=brand_id or brand.id,
            name=name,
            description=description,
            price=Decimal(price),
            stock=stock,
            # Strictly increasing so "newest first" is deterministic
            created_at=base_time + timedelta(minutes=counter["n"]),
            deleted_at=datetime.now(timezone.utc) if deleted else None,
        )
        db.add(product)
        db.commit()
        return product

    return _make


@pytest.fixture
def make_review(db):
    def _make(product, user, rating):
        review = Review(product_id=product.id, user_id=user.id, rating=rating)
        db.add(review)
        db.commit()
        return review

    return _make


@pytest.fixture
def owner(make_user):
    return make_user(email="owner@example.com", name="Owner")


@pytest.fixture
def stranger(make_user):
    return make_user(email="stranger@example.com", name="Stranger")


@pytest.fixture
def shop(make_shop, owner):
    return make_shop(owner)

# =========================================================
# SEEDS
# Usage: python -m app.seeds <table> [total]
#
#   roles | categories | brands    reference data, only missing names
#   users | shops                  demo owners and one shop each
#   products                       PRODUCTS_PER_SHOP rows per live shop
#   reviews [total]                `total` reviews per live product
#   all [total] | delete-all
#
# Each run is a single transaction: either every row of the
# requested tables lands or none does.
# =========================================================

import logging
import random
import sys
from dataclasses import asdict, dataclass
from decimal import Decimal

from sqlalchemy import delete, exists, select
from sqlalchemy.orm import Session

from app.core.hashing import hash_password
from app.database import SessionLocal, generate_id, transaction
from app.models.catalog import Brand, Category
from app.models.products import Product
from app.models.reviews import Review
from app.models.shops import Shop
from app.models.users import Role, User
from app.repositories.users import DEFAULT_ROLE

logger = logging.getLogger("app.seeds")

ROLE_NAMES = ["admin", "end_user"]

CATEGORY_NAMES = [
    "Electronics",
    "Fashion",
    "Home & Living",
    "Health & Beauty",
    "Sports & Outdoors",
    "Books",
    "Toys & Games",
    "Groceries",
]

BRAND_NAMES = [
    "Acme",
    "Globex",
    "Initech",
    "Umbrella",
    "Stark",
    "Wayne",
    "Hooli",
    "Vandelay",
]

DEMO_USERS = 5
DEMO_EMAIL = "seed.user{n}@example.com"
DEMO_PASSWORD = "password123"

PRODUCTS_PER_SHOP = 5
DEFAULT_REVIEWS = 3

SHOP_WORDS = ["Corner", "Harbor", "Summit", "Maple", "Copper", "Lantern", "Orchard", "Atlas"]
SHOP_KINDS = ["Store", "Market", "Outlet", "Supply", "Goods"]
PRODUCT_ADJECTIVES = ["Compact", "Wireless", "Classic", "Deluxe", "Rugged", "Smart", "Eco", "Portable"]
PRODUCT_NOUNS = ["Speaker", "Backpack", "Lamp", "Kettle", "Jacket", "Notebook", "Headphones", "Bottle"]
REVIEW_COMMENTS = [
    "Exactly as described.",
    "Arrived late but works fine.",
    "Great value for the price.",
    "Would not buy again.",
    "Solid build quality.",
]


@dataclass
class RoleRow:
    id: str
    name: str


@dataclass
class CategoryRow:
    id: str
    name: str


@dataclass
class BrandRow:
    id: str
    name: str


@dataclass
class UserRow:
    id: str
    role_id: str
    email: str
    name: str
    password_hash: str


@dataclass
class ShopRow:
    id: str
    user_id: str
    name: str
    description: str
    terms: str


@dataclass
class ProductRow:
    id: str
    user_id: str
    shop_id: str
    category_id: str
    brand_id: str
    name: str
    description: str
    price: Decimal
    stock: int


@dataclass
class ReviewRow:
    id: str
    product_id: str
    user_id: str
    rating: int
    comment: str


def _missing(db: Session, model, names: list[str]) -> list[str]:
    existing = set(db.scalars(select(model.name).where(model.name.in_(names))))
    return [name for name in names if name not in existing]


def seed_roles(db: Session) -> int:
    rows = [RoleRow(id=generate_id(), name=name) for name in _missing(db, Role, ROLE_NAMES)]
    db.add_all(Role(**asdict(row)) for row in rows)
    db.flush()
    return len(rows)


def seed_categories(db: Session) -> int:
    rows = [CategoryRow(id=generate_id(), name=name) for name in _missing(db, Category, CATEGORY_NAMES)]
    db.add_all(Category(**asdict(row)) for row in rows)
    db.flush()
    return len(rows)


def seed_brands(db: Session) -> int:
    rows = [BrandRow(id=generate_id(), name=name) for name in _missing(db, Brand, BRAND_NAMES)]
    db.add_all(Brand(**asdict(row)) for row in rows)
    db.flush()
    return len(rows)


def seed_users(db: Session) -> int:
    role_id = db.scalar(select(Role.id).where(Role.name == DEFAULT_ROLE))

    if role_id is None:
        raise RuntimeError(f"Role {DEFAULT_ROLE!r} is missing, seed roles first")

    emails = [DEMO_EMAIL.format(n=n) for n in range(1, DEMO_USERS + 1)]
    existing = set(db.scalars(select(User.email).where(User.email.in_(emails))))
    password_hash = hash_password(DEMO_PASSWORD)

    rows = [
        UserRow(
            id=generate_id(),
            role_id=role_id,
            email=email,
            name=f"Seed User {n}",
            password_hash=password_hash,
        )
        for n, email in enumerate(emails, start=1)
        if email not in existing
    ]
    db.add_all(User(**asdict(row)) for row in rows)
    db.flush()
    return len(rows)


def seed_shops(db: Session) -> int:
    """One shop for every demo user that has no live shop yet."""
    emails = [DEMO_EMAIL.format(n=n) for n in range(1, DEMO_USERS + 1)]
    owner_ids = db.scalars(
        select(User.id)
        .where(
            User.email.in_(emails),
            ~exists().where(Shop.user_id == User.id, Shop.deleted_at.is_(None)),
        )
        .order_by(User.email)
    ).all()

    rows = []
    for owner_id in owner_ids:
        name = f"{random.choice(SHOP_WORDS)} {random.choice(SHOP_KINDS)}"
        rows.append(
            ShopRow(
                id=generate_id(),
                user_id=owner_id,
                name=name,
                description=f"{name} sells a little of everything.",
                terms="Returns accepted within 14 days with receipt.",
            )
        )

    db.add_all(Shop(**asdict(row)) for row in rows)
    db.flush()
    return len(rows)


def seed_products(db: Session) -> int:
    category_ids = db.scalars(select(Category.id)).all()
    brand_ids = db.scalars(select(Brand.id)).all()
    shops = db.execute(select(Shop.id, Shop.user_id).where(Shop.deleted_at.is_(None))).all()

    if not category_ids or not brand_ids:
        raise RuntimeError("Categories and brands must be seeded before products")

    rows = []
    for shop in shops:
        for _ in range(PRODUCTS_PER_SHOP):
            name = f"{random.choice(PRODUCT_ADJECTIVES)} {random.choice(PRODUCT_NOUNS)}"
            rows.append(
                ProductRow(
                    id=generate_id(),
                    # Listing ownership follows the shop owner
                    user_id=shop.user_id,
                    shop_id=shop.id,
                    category_id=random.choice(category_ids),
                    brand_id=random.choice(brand_ids),
                    name=name,
                    description=f"{name} for everyday use.",
                    price=Decimal(random.randint(1_000, 100_000)) / 100,
                    stock=random.randint(0, 100),
                )
            )

    db.add_all(Product(**asdict(row)) for row in rows)
    db.flush()
    return len(rows)


def seed_reviews(db: Session, total: int = DEFAULT_REVIEWS) -> int:
    product_ids = db.scalars(select(Product.id).where(Product.deleted_at.is_(None))).all()
    user_ids = db.scalars(select(User.id)).all()

    if product_ids and not user_ids:
        raise RuntimeError("Users must be seeded before reviews")

    rows = [
        ReviewRow(
            id=generate_id(),
            product_id=product_id,
            user_id=random.choice(user_ids),
            rating=random.randint(1, 5),
            comment=random.choice(REVIEW_COMMENTS),
        )
        for product_id in product_ids
        for _ in range(total)
    ]

    db.add_all(Review(**asdict(row)) for row in rows)
    db.flush()
    return len(rows)


def delete_all(db: Session) -> None:
    # Children first so foreign keys never dangle mid-transaction
    for model in (Review, Product, Shop, Category, Brand):
        db.execute(delete(model))


SEEDERS = {
    "roles": [seed_roles],
    "categories": [seed_categories],
    "brands": [seed_brands],
    "users": [seed_users],
    "shops": [seed_shops],
    "products": [seed_products],
    "reviews": [seed_reviews],
    "all": [
        seed_roles,
        seed_categories,
        seed_brands,
        seed_users,
        seed_shops,
        seed_products,
        seed_reviews,
    ],
}


def run(db: Session, table: str, total: int = DEFAULT_REVIEWS) -> None:
    if table == "delete-all":
        with transaction(db):
            delete_all(db)
        logger.info("All seeded tables cleared")
        return

    seeders = SEEDERS.get(table)

    if seeders is None:
        logger.warning(f"No seed to run for {table!r}")
        return

    with transaction(db):
        for seeder in seeders:
            inserted = seeder(db, total) if seeder is seed_reviews else seeder(db)
            logger.info(f"{seeder.__name__}: {inserted} rows")

    logger.info("Seed ran successfully")


def main(argv: list[str]) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s | %(levelname)s | %(message)s")

    usage = f"Usage: python -m app.seeds <{'|'.join([*SEEDERS, 'delete-all'])}> [total]"

    if len(argv) not in (1, 2):
        logger.error(usage)
        return 2

    try:
        total = int(argv[1]) if len(argv) == 2 else DEFAULT_REVIEWS
    except ValueError:
        logger.error(usage)
        return 2

    if total < 0:
        logger.error("total must not be negative")
        return 2

    db = SessionLocal()
    try:
        run(db, argv[0], total)
    finally:
        db.close()

    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))

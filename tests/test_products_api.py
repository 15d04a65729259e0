import uuid
from datetime import datetime, timezone

import pytest

from app.models import Product


@pytest.fixture
def product_body(shop, category, brand):
    return {
        "shop_id": shop.id,
        "category_id": category.id,
        "brand_id": brand.id,
        "name": "Mechanical Keyboard",
        "description": "Hot-swappable switches",
        "price": 1250.5,
        "stock": 7,
    }


def test_create_then_get_round_trip(client, owner, product_body, shop, category, brand):
    created = client.post("/products", json=product_body, headers={"X-USER-ID": owner.id})

    assert created.status_code == 201
    body = created.json()
    assert body["success"] is True
    product_id = body["data"]["id"]

    fetched = client.get(f"/products/{product_id}")

    assert fetched.status_code == 200
    data = fetched.json()["data"]
    assert data["name"] == product_body["name"]
    assert data["description"] == product_body["description"]
    assert data["price"] == pytest.approx(product_body["price"])
    assert data["stock"] == product_body["stock"]
    assert data["user_id"] == owner.id
    assert data["shop"]["id"] == shop.id
    assert data["category"]["id"] == category.id
    assert data["brand"]["id"] == brand.id
    assert data["rating"] == 0.0


def test_create_in_someone_elses_shop_is_forbidden(client, db, stranger, product_body):
    response = client.post("/products", json=product_body, headers={"X-USER-ID": stranger.id})

    assert response.status_code == 403
    assert response.json()["success"] is False
    assert db.query(Product).count() == 0


def test_create_in_unknown_shop_is_forbidden(client, owner, product_body):
    product_body["shop_id"] = str(uuid.uuid4())

    response = client.post("/products", json=product_body, headers={"X-USER-ID": owner.id})

    assert response.status_code == 403


def test_create_validation_errors_are_reported_per_field(client, owner, product_body):
    product_body["price"] = -1
    product_body["shop_id"] = "not-a-uuid"
    del product_body["name"]

    response = client.post("/products", json=product_body, headers={"X-USER-ID": owner.id})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert set(body["errors"]) >= {"price", "shop_id", "name"}
    assert all(isinstance(messages, list) for messages in body["errors"].values())


def test_missing_user_header_is_unauthorized(client):
    response = client.get("/products")

    assert response.status_code == 401
    assert response.json() == {"success": False, "message": "Unauthorized", "errors": {}}


def test_list_returns_items_and_meta(client, owner, shop, make_product):
    for name in ["One", "Two", "Three"]:
        make_product(shop, name=name)

    response = client.get("/products", params={"page": 1, "paginate": 2}, headers={"X-USER-ID": owner.id})

    assert response.status_code == 200
    data = response.json()["data"]
    assert [item["name"] for item in data["items"]] == ["Three", "Two"]
    assert data["meta"] == {"total_data": 3, "total_pages": 2, "page": 1, "paginate": 2}


def test_list_defaults_zero_paging(client, owner, shop, make_product):
    make_product(shop)

    response = client.get("/products", params={"page": 0, "paginate": 0}, headers={"X-USER-ID": owner.id})

    assert response.status_code == 200
    assert response.json()["data"]["meta"]["page"] == 1
    assert response.json()["data"]["meta"]["paginate"] == 10


def test_list_filters_by_repeated_category_ids(client, owner, shop, make_product, category, other_category):
    make_product(shop, name="Gadget", category_id=category.id)
    make_product(shop, name="Novel", category_id=other_category.id)

    response = client.get(
        "/products",
        params=[("category_id", other_category.id)],
        headers={"X-USER-ID": owner.id},
    )

    assert [item["name"] for item in response.json()["data"]["items"]] == ["Novel"]


def test_list_inverted_price_range_is_empty_success(client, owner, shop, make_product):
    make_product(shop, price="75.00")

    response = client.get(
        "/products",
        params={"min_price": 100, "max_price": 50},
        headers={"X-USER-ID": owner.id},
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["items"] == []
    assert data["meta"]["total_data"] == 0
    assert data["meta"]["total_pages"] == 1


def test_list_rejects_short_search_query(client, owner):
    response = client.get("/products", params={"search_query": "ab"}, headers={"X-USER-ID": owner.id})

    assert response.status_code == 400
    assert "search_query" in response.json()["errors"]


def test_get_unknown_product_is_not_found(client):
    response = client.get(f"/products/{uuid.uuid4()}")

    assert response.status_code == 404
    assert response.json()["message"] == "Product not found"


def test_get_with_malformed_id_is_bad_request(client):
    response = client.get("/products/42")

    assert response.status_code == 400


def test_patch_replaces_mutable_fields(client, owner, shop, make_shop, make_product, product_body, other_brand):
    product = make_product(shop)
    second_shop = make_shop(owner, name="Second Shop")
    product_body.update(shop_id=second_shop.id, brand_id=other_brand.id, name="Renamed", price=10, stock=0)

    response = client.patch(f"/products/{product.id}", json=product_body, headers={"X-USER-ID": owner.id})

    assert response.status_code == 200
    data = client.get(f"/products/{product.id}").json()["data"]
    assert data["name"] == "Renamed"
    assert data["shop"]["id"] == second_shop.id
    assert data["brand"]["id"] == other_brand.id
    assert data["stock"] == 0


def test_patch_by_another_user_is_forbidden_and_leaves_product(client, db, owner, stranger, shop, make_product, product_body):
    product = make_product(shop, name="Original")
    product_body["name"] = "Hijacked"

    response = client.patch(f"/products/{product.id}", json=product_body, headers={"X-USER-ID": stranger.id})

    assert response.status_code == 403
    db.expire_all()
    assert db.get(Product, product.id).name == "Original"


def test_patch_deleted_product_is_not_found(client, owner, shop, make_product, product_body):
    product = make_product(shop, deleted=True)

    response = client.patch(f"/products/{product.id}", json=product_body, headers={"X-USER-ID": owner.id})

    assert response.status_code == 404


def test_delete_is_soft_and_idempotent(client, db, owner, shop, make_product):
    product = make_product(shop)

    first = client.delete(f"/products/{product.id}", headers={"X-USER-ID": owner.id})
    db.expire_all()
    deleted_at = db.get(Product, product.id).deleted_at

    second = client.delete(f"/products/{product.id}", headers={"X-USER-ID": owner.id})
    db.expire_all()

    assert first.status_code == 200
    assert second.status_code == 200
    assert deleted_at is not None
    assert db.get(Product, product.id).deleted_at == deleted_at
    assert client.get(f"/products/{product.id}").status_code == 404


def test_delete_by_another_user_is_forbidden(client, db, stranger, shop, make_product):
    product = make_product(shop)

    response = client.delete(f"/products/{product.id}", headers={"X-USER-ID": stranger.id})

    assert response.status_code == 403
    db.expire_all()
    assert db.get(Product, product.id).deleted_at is None


def test_list_rejects_oversized_page(client, owner):
    response = client.get("/products", params={"page": 10**20}, headers={"X-USER-ID": owner.id})

    assert response.status_code == 400
    assert "page" in response.json()["errors"]


def test_list_rejects_oversized_paginate(client, owner):
    response = client.get("/products", params={"paginate": 10**20}, headers={"X-USER-ID": owner.id})

    assert response.status_code == 400
    assert "paginate" in response.json()["errors"]


def test_list_accepts_largest_allowed_page(client, owner, shop, make_product):
    make_product(shop)

    response = client.get(
        "/products",
        params={"page": 1_000_000, "paginate": 100},
        headers={"X-USER-ID": owner.id},
    )

    assert response.status_code == 200
    assert response.json()["data"]["items"] == []
    assert response.json()["data"]["meta"]["total_data"] == 1


def test_patch_moves_updated_at_forward(client, db, owner, shop, make_product, product_body):
    product = make_product(shop)
    stale = datetime(2020, 1, 1, tzinfo=timezone.utc)
    product.updated_at = stale
    db.commit()

    response = client.patch(f"/products/{product.id}", json=product_body, headers={"X-USER-ID": owner.id})

    assert response.status_code == 200
    db.expire_all()
    refreshed = db.get(Product, product.id)
    assert refreshed.updated_at.replace(tzinfo=None) > stale.replace(tzinfo=None)
    assert refreshed.created_at.replace(tzinfo=None) == datetime(2026, 1, 1, 0, 1)

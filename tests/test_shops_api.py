import uuid
from datetime import datetime, timezone

from app.models import Shop


SHOP_BODY = {
    "name": "Night Market",
    "description": "Late night snacks",
    "terms": "Cash only",
}


def test_create_and_get_shop(client, owner):
    created = client.post("/shops", json=SHOP_BODY, headers={"X-USER-ID": owner.id})

    assert created.status_code == 201
    shop_id = created.json()["data"]["id"]

    fetched = client.get(f"/shops/{shop_id}")

    assert fetched.status_code == 200
    assert fetched.json()["data"] == {"id": shop_id, **SHOP_BODY}


def test_list_shops_is_scoped_to_owner(client, owner, stranger, make_shop):
    make_shop(owner, name="Mine A")
    make_shop(owner, name="Mine B")
    make_shop(owner, name="Closed", deleted=True)
    make_shop(stranger, name="Theirs")

    response = client.get("/shops", headers={"X-USER-ID": owner.id})

    data = response.json()["data"]
    assert sorted(item["name"] for item in data["items"]) == ["Mine A", "Mine B"]
    assert data["meta"]["total_data"] == 2
    assert data["meta"]["total_pages"] == 1


def test_update_shop_by_owner(client, owner, shop):
    response = client.patch(f"/shops/{shop.id}", json=SHOP_BODY, headers={"X-USER-ID": owner.id})

    assert response.status_code == 200
    assert client.get(f"/shops/{shop.id}").json()["data"]["name"] == SHOP_BODY["name"]


def test_update_shop_by_stranger_is_forbidden(client, db, stranger, shop):
    response = client.patch(f"/shops/{shop.id}", json=SHOP_BODY, headers={"X-USER-ID": stranger.id})

    assert response.status_code == 403
    db.expire_all()
    assert db.get(Shop, shop.id).name == "Corner Shop"


def test_delete_shop_hides_it_and_its_products(client, owner, shop, make_product):
    product = make_product(shop)

    response = client.delete(f"/shops/{shop.id}", headers={"X-USER-ID": owner.id})

    assert response.status_code == 200
    assert client.get(f"/shops/{shop.id}").status_code == 404
    assert client.get(f"/products/{product.id}").status_code == 404


def test_delete_unknown_shop_is_forbidden(client, owner):
    response = client.delete(f"/shops/{uuid.uuid4()}", headers={"X-USER-ID": owner.id})

    assert response.status_code == 403


def test_update_shop_moves_updated_at_forward(client, db, owner, shop):
    stale = datetime(2020, 1, 1, tzinfo=timezone.utc)
    shop.updated_at = stale
    db.commit()

    response = client.patch(f"/shops/{shop.id}", json=SHOP_BODY, headers={"X-USER-ID": owner.id})

    assert response.status_code == 200
    db.expire_all()
    assert db.get(Shop, shop.id).updated_at.replace(tzinfo=None) > stale.replace(tzinfo=None)


def test_list_shops_rejects_oversized_page(client, owner):
    response = client.get("/shops", params={"page": 10**20}, headers={"X-USER-ID": owner.id})

    assert response.status_code == 400
    assert "page" in response.json()["errors"]


def test_list_shops_rejects_oversized_paginate(client, owner):
    response = client.get("/shops", params={"paginate": 10**20}, headers={"X-USER-ID": owner.id})

    assert response.status_code == 400
    assert "paginate" in response.json()["errors"]


def test_list_shops_still_clamps_zero_paging(client, owner, shop):
    response = client.get("/shops", params={"page": 0, "paginate": -5}, headers={"X-USER-ID": owner.id})

    assert response.status_code == 200
    meta = response.json()["data"]["meta"]
    assert (meta["page"], meta["paginate"]) == (1, 10)

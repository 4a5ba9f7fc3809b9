from conftest import add_user, auth

from tradelink.models.enums import UserRole


async def test_admin_creates_users(client, marketplace):
    body = {"email": "exporter@example.com", "role": "EXPORT_COMPANY", "firstName": "Kojo", "lastName": "Asante"}

    resp = await client.post("/users", json=body, headers=auth(marketplace.buyer_user))
    assert resp.status_code == 403

    resp = await client.post("/users", json=body, headers=auth(marketplace.admin_user))
    assert resp.status_code == 201
    assert resp.json()["verified"] is False
    assert resp.json()["timezone"] == "Africa/Accra"

    resp = await client.post("/users", json=body, headers=auth(marketplace.admin_user))
    assert resp.status_code == 400


async def test_user_updates_own_profile_but_not_verification(client, marketplace):
    me = marketplace.buyer_user
    resp = await client.patch(f"/users/{me.id}", json={"phone": "+233200000000"}, headers=auth(me))
    assert resp.status_code == 200
    assert resp.json()["phone"] == "+233200000000"

    resp = await client.patch(f"/users/{me.id}", json={"verified": True}, headers=auth(me))
    assert resp.status_code == 403

    resp = await client.patch(f"/users/{marketplace.farmer_user.id}", json={"phone": "1"}, headers=auth(me))
    assert resp.status_code == 403

    resp = await client.get("/users/me", headers=auth(me))
    assert resp.json()["email"] == "buyer@example.com"


async def test_admin_verifies_and_deletes_user(client, db, marketplace):
    user = await add_user(db, "pending@example.com", UserRole.FARMER, verified=False)
    admin = auth(marketplace.admin_user)

    resp = await client.patch(f"/users/{user.id}", json={"verified": True}, headers=admin)
    assert resp.json()["verified"] is True

    resp = await client.delete(f"/users/{user.id}", headers=admin)
    assert resp.status_code == 200
    resp = await client.get(f"/users/{user.id}", headers=admin)
    assert resp.status_code == 404


async def test_farmer_profile_crud(client, db, marketplace):
    user = await add_user(db, "grower@example.com", UserRole.FARMER, verified=False)
    headers = auth(user)

    resp = await client.post(
        "/farmers",
        json={"userId": user.id, "location": "Techiman", "district": "Techiman", "region": "Bono East"},
        headers=headers,
    )
    assert resp.status_code == 201
    farmer = resp.json()
    assert farmer["user"]["verified"] is False

    resp = await client.post(
        "/farmers",
        json={"userId": user.id, "location": "x", "district": "x", "region": "x"},
        headers=headers,
    )
    assert resp.status_code == 400

    resp = await client.get("/farmers", params={"region": "Bono East"}, headers=headers)
    assert [f["id"] for f in resp.json()["data"]] == [farmer["id"]]

    resp = await client.get("/farmers", params={"verified": "true"}, headers=headers)
    assert [f["id"] for f in resp.json()["data"]] == [marketplace.farmer.id]

    resp = await client.patch(f"/farmers/{farmer['id']}", json={"farmSize": 12.5}, headers=headers)
    assert resp.json()["farmSize"] == 12.5

    resp = await client.delete(f"/farmers/{farmer['id']}", headers=headers)
    assert resp.status_code == 200
    resp = await client.get(f"/farmers/{farmer['id']}", headers=headers)
    assert resp.status_code == 404


async def test_buyer_list_filters_by_seeking_crop(client, db, marketplace):
    user = await add_user(db, "nuts@example.com", UserRole.BUYER)
    headers = auth(user)

    resp = await client.post(
        "/buyers",
        json={
            "userId": user.id,
            "companyName": "Rotterdam Nuts BV",
            "country": "NL",
            "industry": "Food Trading",
            "seekingCrops": ["Cashew", "Shea"],
            "volumeRequired": "20 tons",
        },
        headers=headers,
    )
    assert resp.status_code == 201

    resp = await client.get("/buyers", params={"seekingCrops": ["cashew"]}, headers=headers)
    body = resp.json()
    assert body["meta"]["total"] == 1
    assert body["data"][0]["companyName"] == "Rotterdam Nuts BV"

    resp = await client.get("/buyers", params={"country": "GH"}, headers=headers)
    assert [b["id"] for b in resp.json()["data"]] == [marketplace.buyer.id]

    resp = await client.get(f"/buyers/user/{user.id}", headers=headers)
    assert resp.json()["country"] == "NL"

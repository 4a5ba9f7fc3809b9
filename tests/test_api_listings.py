from conftest import add_user, auth

from tradelink.models.enums import UserRole

LISTING_BODY = {
    "cropType": "Cashew",
    "cropVariety": "W320",
    "quantity": 5,
    "qualityGrade": "GRADE_A",
    "pricePerUnit": 1800,
    "availableFrom": "2026-01-15T00:00:00",
    "description": "Raw cashew nuts from Bono region",
}


async def test_create_listing_as_existing_farmer(client, marketplace):
    resp = await client.post("/listings", json=LISTING_BODY, headers=auth(marketplace.farmer_user))
    assert resp.status_code == 201
    body = resp.json()
    assert body["farmerId"] == marketplace.farmer.id
    assert body["status"] == "ACTIVE"
    assert body["unit"] == "tons"


async def test_create_listing_creates_farmer_profile(client, db, marketplace):
    user = await add_user(db, "new-farmer@example.com", UserRole.FARMER)

    resp = await client.post("/listings", json=LISTING_BODY, headers=auth(user))
    assert resp.status_code == 201

    profile = await client.get(f"/farmers/user/{user.id}", headers=auth(user))
    assert profile.status_code == 200
    assert profile.json()["id"] == resp.json()["farmerId"]
    assert profile.json()["region"] == "Unknown"


async def test_buyer_cannot_create_listing(client, marketplace):
    resp = await client.post("/listings", json=LISTING_BODY, headers=auth(marketplace.buyer_user))
    assert resp.status_code == 403


async def test_only_owner_updates_or_deletes(client, db, marketplace):
    other = await add_user(db, "other-farmer@example.com", UserRole.FARMER)
    await client.post("/listings", json=LISTING_BODY, headers=auth(other))

    url = f"/listings/{marketplace.listing.id}"
    resp = await client.patch(url, json={"pricePerUnit": 2600}, headers=auth(other))
    assert resp.status_code == 403

    resp = await client.patch(url, json={"pricePerUnit": 2600}, headers=auth(marketplace.farmer_user))
    assert resp.status_code == 200
    assert resp.json()["pricePerUnit"] == 2600

    resp = await client.delete(url, headers=auth(other))
    assert resp.status_code == 403
    resp = await client.delete(url, headers=auth(marketplace.farmer_user))
    assert resp.status_code == 200


async def test_list_listings_filters_and_paginates(client, marketplace):
    headers = auth(marketplace.farmer_user)
    await client.post("/listings", json=LISTING_BODY, headers=headers)
    await client.post("/listings", json={**LISTING_BODY, "status": "SOLD"}, headers=headers)

    resp = await client.get("/listings", params={"sortBy": "pricePerUnit", "sortOrder": "asc"}, headers=headers)
    body = resp.json()
    assert body["meta"]["total"] == 2
    assert [item["cropType"] for item in body["data"]] == ["Cashew", "Cocoa"]

    resp = await client.get("/listings", params={"cropType": "Cocoa", "region": "Ashanti"}, headers=headers)
    assert [item["id"] for item in resp.json()["data"]] == [marketplace.listing.id]

    resp = await client.get("/listings", params={"status": "SOLD"}, headers=headers)
    assert resp.json()["meta"]["total"] == 1

    resp = await client.get("/listings", params={"maxPrice": 2000}, headers=headers)
    assert [item["cropType"] for item in resp.json()["data"]] == ["Cashew"]


async def test_search_listings(client, marketplace):
    headers = auth(marketplace.farmer_user)
    await client.post("/listings", json=LISTING_BODY, headers=headers)

    resp = await client.get("/listings/search", params={"q": "bono"}, headers=headers)
    assert [item["cropType"] for item in resp.json()] == ["Cashew"]

    resp = await client.get("/listings/search", params={"q": "coc"}, headers=headers)
    assert [item["id"] for item in resp.json()] == [marketplace.listing.id]


async def test_listing_validation(client, marketplace):
    resp = await client.post("/listings", json={**LISTING_BODY, "quantity": 0}, headers=auth(marketplace.farmer_user))
    assert resp.status_code == 422

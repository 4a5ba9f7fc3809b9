from conftest import add_user, auth

from tradelink.models.enums import UserRole


async def create_exporter(client, db, marketplace):
    user = await add_user(db, "desk@tema-commodities.example.com", UserRole.EXPORT_COMPANY)
    resp = await client.post(
        "/export-companies",
        json={"userId": user.id, "companyName": "Tema Commodities", "registrationNo": "CS-998877", "gepaLicense": "GEPA-221"},
        headers=auth(user),
    )
    assert resp.status_code == 201
    return user, resp.json()


async def test_export_company_crud(client, db, marketplace):
    user, company = await create_exporter(client, db, marketplace)
    headers = auth(user)
    assert company["user"]["id"] == user.id

    resp = await client.post(
        "/export-companies",
        json={"userId": marketplace.buyer_user.id, "companyName": "Copycat", "registrationNo": "CS-998877"},
        headers=headers,
    )
    assert resp.status_code == 400

    resp = await client.patch(f"/export-companies/{company['id']}", json={"gepaLicense": "GEPA-300"}, headers=headers)
    assert resp.json()["gepaLicense"] == "GEPA-300"

    resp = await client.get(f"/export-companies/user/{user.id}", headers=headers)
    assert resp.json()["id"] == company["id"]

    resp = await client.get("/export-companies", headers=headers)
    assert resp.json()["meta"]["total"] == 1

    resp = await client.delete(f"/export-companies/{company['id']}", headers=headers)
    assert resp.status_code == 200
    resp = await client.get(f"/export-companies/{company['id']}", headers=headers)
    assert resp.status_code == 404


async def test_supplier_network_flow(client, db, marketplace):
    user, company = await create_exporter(client, db, marketplace)
    headers = auth(user)

    resp = await client.post(
        "/supplier-networks",
        json={"farmerId": marketplace.farmer.id, "relationshipType": "CONTRACT", "contractStartDate": "2026-01-01T00:00:00"},
        headers=headers,
    )
    assert resp.status_code == 201
    link = resp.json()
    assert link["exportCompanyId"] == company["id"]
    assert link["relationshipType"] == "CONTRACT"

    resp = await client.post("/supplier-networks", json={"farmerId": marketplace.farmer.id}, headers=headers)
    assert resp.status_code == 400

    resp = await client.get("/supplier-networks", headers=headers)
    body = resp.json()
    assert body["meta"]["total"] == 1
    assert body["data"][0]["metrics"] == {
        "totalDeals": 0,
        "totalValue": 0.0,
        "qualityScore": None,
        "reliabilityScore": None,
        "lastDealDate": None,
        "activeListings": 1,
    }

    resp = await client.get(f"/supplier-networks/{link['id']}", headers=headers)
    assert resp.json()["transactionHistory"] == []
    assert resp.json()["exportCompany"]["companyName"] == "Tema Commodities"

    resp = await client.patch(f"/supplier-networks/{link['id']}", json={"status": "INACTIVE"}, headers=headers)
    assert resp.json()["status"] == "INACTIVE"

    resp = await client.get("/supplier-networks/stats", headers=headers)
    assert resp.json() == {"totalSuppliers": 1, "activeSuppliers": 0, "totalDeals": 0, "totalValue": 0.0}

    resp = await client.delete(f"/supplier-networks/{link['id']}", headers=auth(marketplace.buyer_user))
    assert resp.status_code == 403

    resp = await client.delete(f"/supplier-networks/{link['id']}", headers=headers)
    assert resp.status_code == 200


async def test_buyer_without_export_company(client, marketplace):
    headers = auth(marketplace.buyer_user)

    resp = await client.get("/supplier-networks", headers=headers)
    assert resp.json()["data"] == []

    resp = await client.post("/supplier-networks", json={"farmerId": marketplace.farmer.id}, headers=headers)
    assert resp.status_code == 404

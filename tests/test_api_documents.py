from conftest import auth


async def test_document_lifecycle(client, marketplace):
    farmer = auth(marketplace.farmer_user)
    resp = await client.post(
        "/documents",
        json={
            "name": "Certificate of origin",
            "type": "CERTIFICATE_OF_ORIGIN",
            "fileUrl": "https://files.example.com/coo.pdf",
            "issuedBy": "GEPA",
        },
        headers=farmer,
    )
    assert resp.status_code == 201
    doc = resp.json()
    assert doc["status"] == "PENDING"
    assert doc["user"]["id"] == marketplace.farmer_user.id

    resp = await client.post(f"/documents/{doc['id']}/verify", json={}, headers=farmer)
    assert resp.status_code == 403

    resp = await client.post(
        f"/documents/{doc['id']}/verify", json={"notes": "ok"}, headers=auth(marketplace.admin_user)
    )
    assert resp.status_code == 200
    assert resp.json()["status"] == "VERIFIED"
    assert resp.json()["verifiedBy"] == marketplace.admin_user.id

    resp = await client.get("/documents/stats", headers=farmer)
    assert resp.json() == {"total": 1, "verified": 1, "pending": 0, "expired": 0, "rejected": 0}


async def test_documents_are_scoped_to_owner_unless_admin(client, marketplace):
    body = {"name": "Packing list", "type": "PACKING_LIST", "fileUrl": "data:application/pdf;base64,JVBERi0="}
    await client.post("/documents", json=body, headers=auth(marketplace.farmer_user))

    resp = await client.get("/documents", headers=auth(marketplace.buyer_user))
    assert resp.json()["meta"]["total"] == 0

    resp = await client.get("/documents", params={"type": "PACKING_LIST"}, headers=auth(marketplace.admin_user))
    assert resp.json()["meta"]["total"] == 1


async def test_reject_requires_notes_and_delete_requires_owner(client, marketplace):
    body = {"name": "Invoice", "type": "COMMERCIAL_INVOICE", "fileUrl": "https://files.example.com/inv.pdf"}
    doc = (await client.post("/documents", json=body, headers=auth(marketplace.buyer_user))).json()
    admin = auth(marketplace.admin_user)

    resp = await client.post(f"/documents/{doc['id']}/reject", json={}, headers=admin)
    assert resp.status_code == 422

    resp = await client.post(f"/documents/{doc['id']}/reject", json={"notes": "Unsigned"}, headers=admin)
    assert resp.json()["status"] == "REJECTED"

    resp = await client.delete(f"/documents/{doc['id']}", headers=auth(marketplace.farmer_user))
    assert resp.status_code == 403

    resp = await client.delete(f"/documents/{doc['id']}", headers=auth(marketplace.buyer_user))
    assert resp.status_code == 200
    resp = await client.get(f"/documents/{doc['id']}", headers=admin)
    assert resp.status_code == 404

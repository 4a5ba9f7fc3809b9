from datetime import datetime

import pytest

from conftest import add_user
from tradelink.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from tradelink.crud.transactions import create_transaction
from tradelink.models import ExportCompany, Farmer
from tradelink.models.enums import RelationshipStatus, RelationshipType, UserRole
from tradelink.services import supplier_network_service


@pytest.fixture
async def exporter(db):
    user = await add_user(db, "ops@volta-exports.example.com", UserRole.EXPORT_COMPANY)
    company = ExportCompany(user_id=user.id, company_name="Volta Exports Ltd", registration_no="CS-104422")
    db.add(company)
    await db.commit()
    return company


@pytest.fixture
async def network(db, marketplace, exporter):
    return await supplier_network_service.add_supplier(
        db, {"farmer_id": marketplace.farmer.id, "notes": "Ashanti cocoa"}, exporter.user_id
    )


async def test_add_supplier_defaults(marketplace, exporter, network):
    assert network.export_company_id == exporter.id
    assert network.farmer_id == marketplace.farmer.id
    assert network.status == RelationshipStatus.ACTIVE
    assert network.relationship_type == RelationshipType.DIRECT
    assert network.added_by == exporter.user_id
    assert network.total_deals == 0
    assert network.farmer.region == "Ashanti"


async def test_duplicate_link_is_refused(db, marketplace, exporter, network):
    with pytest.raises(InvalidStateError):
        await supplier_network_service.add_supplier(db, {"farmer_id": marketplace.farmer.id}, exporter.user_id)


async def test_add_supplier_needs_export_company_and_farmer(db, marketplace, exporter):
    with pytest.raises(NotFoundError):
        await supplier_network_service.add_supplier(db, {"farmer_id": marketplace.farmer.id}, marketplace.buyer_user.id)
    with pytest.raises(NotFoundError):
        await supplier_network_service.add_supplier(db, {"farmer_id": "missing"}, exporter.user_id)


async def test_listing_refreshes_deal_metrics(db, marketplace, match, exporter, network):
    for value in (30000, 12500):
        await create_transaction(db, {
            "match_id": match.id,
            "buyer_id": marketplace.buyer.id,
            "export_company_id": exporter.id,
            "quantity": 5,
            "agreed_price": value / 5,
            "total_value": value,
        })
    # handled by another exporter, not counted
    await create_transaction(db, {
        "match_id": match.id,
        "buyer_id": marketplace.buyer.id,
        "quantity": 1,
        "agreed_price": 100,
        "total_value": 100,
    })

    page = await supplier_network_service.list_suppliers(db, exporter.user_id)

    assert page["meta"]["total"] == 1
    listed, metrics = page["data"][0]
    assert metrics["total_deals"] == 2
    assert metrics["total_value"] == 42500
    assert metrics["active_listings"] == 1
    assert isinstance(metrics["last_deal_date"], datetime)
    assert listed.total_deals == 2

    stats = await supplier_network_service.supplier_stats(db, exporter.user_id)
    assert stats == {"total_suppliers": 1, "active_suppliers": 1, "total_deals": 2, "total_value": 42500.0}

    _, history = await supplier_network_service.get_supplier(db, network.id)
    assert len(history) == 2


async def test_users_without_export_company_get_empty_network(db, marketplace):
    page = await supplier_network_service.list_suppliers(db, marketplace.buyer_user.id)
    assert page["data"] == []
    assert page["meta"]["total"] == 0
    assert await supplier_network_service.supplier_stats(db, marketplace.buyer_user.id) == {
        "total_suppliers": 0, "active_suppliers": 0, "total_deals": 0, "total_value": 0.0,
    }


async def test_status_filter_and_update(db, marketplace, exporter, network):
    other_user = await add_user(db, "yaw@example.com", UserRole.FARMER)
    other = Farmer(user_id=other_user.id, location="Ho", district="Ho Municipal", region="Volta")
    db.add(other)
    await db.commit()
    await supplier_network_service.add_supplier(
        db, {"farmer_id": other.id, "relationship_type": RelationshipType.COOPERATIVE}, exporter.user_id
    )

    await supplier_network_service.update_supplier(
        db, network.id, {"status": RelationshipStatus.SUSPENDED, "notes": "Quality audit"}, exporter.user_id
    )

    active = await supplier_network_service.list_suppliers(db, exporter.user_id, status=RelationshipStatus.ACTIVE)
    assert [n.farmer_id for n, _ in active["data"]] == [other.id]

    coops = await supplier_network_service.list_suppliers(
        db, exporter.user_id, relationship_type=RelationshipType.COOPERATIVE
    )
    assert coops["meta"]["total"] == 1

    stats = await supplier_network_service.supplier_stats(db, exporter.user_id)
    assert stats["total_suppliers"] == 2
    assert stats["active_suppliers"] == 1


async def test_only_owner_or_admin_manages_link(db, marketplace, exporter, network):
    with pytest.raises(ForbiddenError):
        await supplier_network_service.update_supplier(db, network.id, {"notes": "x"}, marketplace.buyer_user.id)

    await supplier_network_service.remove_supplier(db, network.id, marketplace.admin_user.id)
    with pytest.raises(NotFoundError):
        await supplier_network_service.get_supplier(db, network.id)

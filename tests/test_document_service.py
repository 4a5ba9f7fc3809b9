from datetime import datetime, timedelta

import pytest

from tradelink.core.exceptions import ForbiddenError, NotFoundError
from tradelink.crud.audit_log import list_audit_logs
from tradelink.models.enums import DocumentStatus, DocumentType
from tradelink.services import document_service

NOW = datetime(2026, 3, 1, 9, 0, 0)


def document_data(**overrides):
    data = {
        "name": "Phytosanitary certificate - lot 12",
        "type": DocumentType.PHYTOSANITARY_CERTIFICATE,
        "file_url": "https://files.example.com/phyto-12.pdf",
        "issued_by": "PPRSD",
    }
    data.update(overrides)
    return data


@pytest.fixture
async def document(db, marketplace):
    return await document_service.create_document(
        db, document_data(expiry_date=datetime.utcnow() + timedelta(days=90)), marketplace.farmer_user.id
    )


# ------------------------------------------------
# create
# ------------------------------------------------
async def test_export_license_defaults_to_one_year_validity(db, marketplace):
    doc = await document_service.create_document(
        db, document_data(type=DocumentType.EXPORT_LICENSE, name="GEPA export licence"), marketplace.farmer_user.id, now=NOW
    )
    assert doc.expiry_date == datetime(2027, 3, 1, 9, 0, 0)
    assert doc.status == DocumentStatus.PENDING
    assert doc.user_id == marketplace.farmer_user.id


def test_default_expiry_on_leap_day():
    assert document_service.default_expiry(DocumentType.EXPORT_LICENSE, datetime(2028, 2, 29)) == datetime(2029, 2, 28)
    assert document_service.default_expiry(DocumentType.PACKING_LIST, NOW) is None


async def test_already_expired_document_is_created_expired(db, marketplace):
    doc = await document_service.create_document(
        db, document_data(expiry_date=NOW - timedelta(days=1)), marketplace.farmer_user.id, now=NOW
    )
    assert doc.status == DocumentStatus.EXPIRED


async def test_create_for_unknown_user(db):
    with pytest.raises(NotFoundError):
        await document_service.create_document(db, document_data(), "missing")


# ------------------------------------------------
# list / stats
# ------------------------------------------------
async def test_listing_expires_overdue_documents(db, marketplace, document):
    later = datetime.utcnow() + timedelta(days=365)
    page = await document_service.list_documents(db, user_id=marketplace.farmer_user.id, now=later)

    assert page["meta"]["total"] == 1
    assert page["data"][0].status == DocumentStatus.EXPIRED


async def test_list_filters_and_stats(db, marketplace, document):
    await document_service.create_document(
        db, document_data(type=DocumentType.COMMERCIAL_INVOICE, name="Invoice 7"), marketplace.buyer_user.id
    )
    await document_service.verify_document(db, document.id, marketplace.admin_user.id)

    invoices = await document_service.list_documents(db, doc_type=DocumentType.COMMERCIAL_INVOICE)
    assert [d.name for d in invoices["data"]] == ["Invoice 7"]

    mine = await document_service.list_documents(db, user_id=marketplace.farmer_user.id)
    assert [d.id for d in mine["data"]] == [document.id]

    assert await document_service.document_stats(db) == {
        "total": 2, "pending": 1, "verified": 1, "rejected": 0, "expired": 0,
    }
    assert (await document_service.document_stats(db, marketplace.buyer_user.id))["total"] == 1


# ------------------------------------------------
# update / review / delete
# ------------------------------------------------
async def test_owner_updates_metadata(db, marketplace, document):
    updated = await document_service.update_document(
        db, document.id, {"reference_number": "PPRSD-2026-0042"}, marketplace.farmer_user.id
    )
    assert updated.reference_number == "PPRSD-2026-0042"


async def test_other_users_cannot_update_or_delete(db, marketplace, document):
    with pytest.raises(ForbiddenError):
        await document_service.update_document(db, document.id, {"name": "x"}, marketplace.buyer_user.id)
    with pytest.raises(ForbiddenError):
        await document_service.delete_document(db, document.id, marketplace.buyer_user.id)


async def test_owner_cannot_verify_own_document(db, marketplace, document):
    with pytest.raises(ForbiddenError):
        await document_service.update_document(
            db, document.id, {"status": DocumentStatus.VERIFIED}, marketplace.farmer_user.id
        )


async def test_admin_status_update_stamps_verification_once(db, marketplace, document):
    admin = marketplace.admin_user.id
    first = await document_service.update_document(db, document.id, {"status": DocumentStatus.VERIFIED}, admin)
    assert first.verified_by == admin
    stamped = first.verified_at
    assert stamped is not None

    again = await document_service.update_document(db, document.id, {"status": DocumentStatus.VERIFIED}, admin)
    assert again.verified_at == stamped


async def test_verify_and_reject_are_audited(db, marketplace, document):
    admin = marketplace.admin_user.id
    verified = await document_service.verify_document(db, document.id, admin, notes="Stamp checked")
    assert verified.status == DocumentStatus.VERIFIED
    assert verified.verification_notes == "Stamp checked"

    rejected = await document_service.reject_document(db, document.id, admin, "Certificate number mismatch")
    assert rejected.status == DocumentStatus.REJECTED
    assert rejected.verified_by == admin

    actions = [entry.action for entry in await list_audit_logs(db, "document", document.id)]
    assert actions == ["verify", "reject"]


async def test_admin_deletes_document(db, marketplace, document):
    await document_service.delete_document(db, document.id, marketplace.admin_user.id)
    with pytest.raises(NotFoundError):
        await document_service.get_document(db, document.id)

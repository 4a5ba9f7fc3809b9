# backend/tradelink/services/document_service.py

"""
Trade document records (licences, certificates, invoices ...).

Only metadata and a file reference are stored. Status runs
PENDING -> VERIFIED | REJECTED, and any document whose expiry date has
passed is flipped to EXPIRED when documents are listed. Export licences
without an expiry date get a one-year validity.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.exceptions import ForbiddenError, NotFoundError
from tradelink.core.logger import get_logger
from tradelink.crud import documents as document_crud
from tradelink.crud.audit_log import create_audit_log
from tradelink.crud.common import page_meta
from tradelink.crud.users import get_user
from tradelink.models.document import Document
from tradelink.models.enums import DocumentStatus, DocumentType, UserRole

logger = get_logger(__name__)

EXPORT_LICENSE_VALIDITY_YEARS = 1
REVIEWED_STATUSES = (DocumentStatus.VERIFIED, DocumentStatus.REJECTED)


def default_expiry(doc_type: DocumentType, now: datetime) -> Optional[datetime]:
    if doc_type != DocumentType.EXPORT_LICENSE:
        return None
    try:
        return now.replace(year=now.year + EXPORT_LICENSE_VALIDITY_YEARS)
    except ValueError:
        # 29 February
        return now.replace(year=now.year + EXPORT_LICENSE_VALIDITY_YEARS, day=28)


async def create_document(db: AsyncSession, data: Dict[str, Any], user_id: str, now: datetime = None) -> Document:
    now = now or datetime.utcnow()
    if not await get_user(db, user_id):
        raise NotFoundError("User not found")

    expiry = data.get("expiry_date") or default_expiry(data["type"], now)
    if expiry is not None and expiry.tzinfo is not None:
        expiry = expiry.astimezone(timezone.utc).replace(tzinfo=None)

    document = await document_crud.create_document(db, {
        **data,
        "expiry_date": expiry,
        "status": DocumentStatus.EXPIRED if expiry and expiry < now else DocumentStatus.PENDING,
        "user_id": user_id,
    })
    logger.info(f"Document created: {document.id}", extra={"user_id": user_id, "entity_id": document.id})
    return document


async def list_documents(
    db: AsyncSession,
    user_id: Optional[str] = None,
    doc_type: Optional[str] = None,
    status: Optional[str] = None,
    transaction_id: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
    now: datetime = None,
) -> Dict[str, Any]:
    expired = await document_crud.expire_overdue_documents(db, now or datetime.utcnow())
    if expired:
        logger.info(f"Expired {expired} overdue documents")

    rows, total = await document_crud.list_documents(
        db,
        user_id=user_id,
        doc_type=doc_type,
        status=status,
        transaction_id=transaction_id,
        page=page,
        limit=limit,
    )
    return {"data": rows, "meta": page_meta(total, page, limit)}


async def get_document(db: AsyncSession, document_id: str) -> Document:
    document = await document_crud.get_document(db, document_id)
    if not document:
        raise NotFoundError("Document not found")
    return document


async def _editable_document(db: AsyncSession, document_id: str, user_id: str, action: str) -> Tuple[Document, bool]:
    """The document and whether the caller is an admin; owners and admins only."""
    document = await get_document(db, document_id)
    user = await get_user(db, user_id)
    is_admin = bool(user) and user.role == UserRole.ADMIN
    if document.user_id != user_id and not is_admin:
        raise ForbiddenError(f"You do not have permission to {action} this document")
    return document, is_admin


async def update_document(db: AsyncSession, document_id: str, updates: Dict[str, Any], user_id: str) -> Document:
    document, is_admin = await _editable_document(db, document_id, user_id, "update")
    if not is_admin and updates.get("status") in REVIEWED_STATUSES:
        raise ForbiddenError("Only admins can verify or reject documents")

    if updates.get("status") == DocumentStatus.VERIFIED and not document.verified_at:
        updates = {**updates, "verified_at": datetime.utcnow(), "verified_by": user_id}

    return await document_crud.update_document(db, document, updates)


async def verify_document(db: AsyncSession, document_id: str, user_id: str, notes: Optional[str] = None) -> Document:
    document = await get_document(db, document_id)
    document = await document_crud.update_document(db, document, {
        "status": DocumentStatus.VERIFIED,
        "verified_at": datetime.utcnow(),
        "verified_by": user_id,
        "verification_notes": notes,
    })
    await create_audit_log(db, user_id, "document", document.id, "verify", notes or "")
    return document


async def reject_document(db: AsyncSession, document_id: str, user_id: str, notes: str) -> Document:
    document = await get_document(db, document_id)
    document = await document_crud.update_document(db, document, {
        "status": DocumentStatus.REJECTED,
        "verified_by": user_id,
        "verification_notes": notes,
    })
    await create_audit_log(db, user_id, "document", document.id, "reject", notes)
    return document


async def delete_document(db: AsyncSession, document_id: str, user_id: str) -> None:
    document, _ = await _editable_document(db, document_id, user_id, "delete")
    await document_crud.delete_document(db, document)
    logger.info(f"Document deleted: {document_id}", extra={"user_id": user_id, "entity_id": document_id})


async def document_stats(db: AsyncSession, user_id: Optional[str] = None) -> Dict[str, int]:
    return await document_crud.document_stats(db, user_id)

# backend/tradelink/crud/documents.py

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates, paginate
from tradelink.models.document import Document
from tradelink.models.enums import DocumentStatus


async def create_document(db: AsyncSession, data: Dict[str, Any]) -> Document:
    document = Document(**data)
    db.add(document)
    await db.commit()
    return await get_document(db, document.id)


async def get_document(db: AsyncSession, document_id: str) -> Optional[Document]:
    return await db.scalar(
        select(Document)
        .where(Document.id == document_id)
        .execution_options(populate_existing=True)
    )


async def expire_overdue_documents(db: AsyncSession, now: datetime) -> int:
    result = await db.execute(
        update(Document)
        .where(Document.expiry_date < now, Document.status != DocumentStatus.EXPIRED)
        .values(status=DocumentStatus.EXPIRED)
        .execution_options(synchronize_session=False)
    )
    await db.commit()
    return result.rowcount or 0


async def list_documents(
    db: AsyncSession,
    user_id: Optional[str] = None,
    doc_type: Optional[str] = None,
    status: Optional[str] = None,
    transaction_id: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Document], int]:
    q = select(Document)
    if user_id:
        q = q.where(Document.user_id == user_id)
    if doc_type:
        q = q.where(Document.type == doc_type)
    if status:
        q = q.where(Document.status == status)
    if transaction_id:
        q = q.where(Document.transaction_id == transaction_id)
    q = q.order_by(Document.created_at.desc()).execution_options(populate_existing=True)
    return await paginate(db, q, page, limit)


async def update_document(db: AsyncSession, document: Document, updates: Dict[str, Any]) -> Document:
    apply_updates(document, updates)
    await db.commit()
    return await get_document(db, document.id)


async def delete_document(db: AsyncSession, document: Document) -> None:
    await db.delete(document)
    await db.commit()


async def document_stats(db: AsyncSession, user_id: Optional[str] = None) -> Dict[str, int]:
    q = select(Document.status, func.count()).group_by(Document.status)
    if user_id:
        q = q.where(Document.user_id == user_id)
    counts = {status: count for status, count in (await db.execute(q)).all()}

    stats = {s.value.lower(): counts.get(s, 0) for s in DocumentStatus}
    stats["total"] = sum(counts.values())
    return stats

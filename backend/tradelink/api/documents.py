# backend/tradelink/api/documents.py

from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user, require_roles
from tradelink.core.database import get_db
from tradelink.models.enums import DocumentStatus, DocumentType
from tradelink.schemas.base import Message, Page
from tradelink.schemas.document import (
    Document,
    DocumentCreate,
    DocumentRejection,
    DocumentReview,
    DocumentStats,
    DocumentUpdate,
)
from tradelink.services import document_service

router = APIRouter(prefix="/documents", tags=["documents"])


@router.post("", response_model=Document, status_code=status.HTTP_201_CREATED)
async def create_document(payload: DocumentCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await document_service.create_document(db, payload.model_dump(), user["sub"])


@router.get("", response_model=Page[Document])
async def list_documents(
    doc_type: Optional[DocumentType] = Query(None, alias="type"),
    doc_status: Optional[DocumentStatus] = Query(None, alias="status"),
    transaction_id: Optional[str] = Query(None, alias="transactionId"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    # admins see every document; other users only their own
    user_id = None if user.get("role") == "ADMIN" else user["sub"]
    return await document_service.list_documents(
        db,
        user_id=user_id,
        doc_type=doc_type,
        status=doc_status,
        transaction_id=transaction_id,
        page=page,
        limit=limit,
    )


@router.get("/stats", response_model=DocumentStats)
async def document_stats(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await document_service.document_stats(db, user["sub"])


@router.get("/{document_id}", response_model=Document)
async def get_document(document_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await document_service.get_document(db, document_id)


@router.patch("/{document_id}", response_model=Document)
async def update_document(
    document_id: str,
    payload: DocumentUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await document_service.update_document(
        db, document_id, payload.model_dump(exclude_unset=True), user["sub"]
    )


@router.post("/{document_id}/verify", response_model=Document)
async def verify_document(
    document_id: str,
    payload: DocumentReview,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_roles("ADMIN")),
):
    return await document_service.verify_document(db, document_id, user["sub"], payload.notes)


@router.post("/{document_id}/reject", response_model=Document)
async def reject_document(
    document_id: str,
    payload: DocumentRejection,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_roles("ADMIN")),
):
    return await document_service.reject_document(db, document_id, user["sub"], payload.notes)


@router.delete("/{document_id}", response_model=Message)
async def delete_document(document_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    await document_service.delete_document(db, document_id, user["sub"])
    return {"message": "Document deleted"}

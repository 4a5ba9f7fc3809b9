# backend/tradelink/schemas/document.py

from typing import Optional
from datetime import datetime

from tradelink.models.enums import DocumentStatus, DocumentType
from tradelink.schemas.base import CamelModel
from tradelink.schemas.user import UserSummary


class DocumentCreate(CamelModel):
    name: str
    type: DocumentType
    file_url: str
    description: Optional[str] = None
    expiry_date: Optional[datetime] = None
    reference_number: Optional[str] = None
    issued_by: Optional[str] = None
    transaction_id: Optional[str] = None


class DocumentUpdate(CamelModel):
    name: Optional[str] = None
    description: Optional[str] = None
    expiry_date: Optional[datetime] = None
    status: Optional[DocumentStatus] = None
    reference_number: Optional[str] = None
    verification_notes: Optional[str] = None


class DocumentReview(CamelModel):
    notes: Optional[str] = None


class DocumentRejection(CamelModel):
    notes: str


class Document(CamelModel):
    id: str
    user_id: str
    transaction_id: Optional[str] = None
    name: str
    type: DocumentType
    file_url: str
    description: Optional[str] = None
    expiry_date: Optional[datetime] = None
    status: DocumentStatus
    reference_number: Optional[str] = None
    issued_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    verified_by: Optional[str] = None
    verification_notes: Optional[str] = None
    user: Optional[UserSummary] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class DocumentStats(CamelModel):
    total: int
    verified: int
    pending: int
    expired: int
    rejected: int

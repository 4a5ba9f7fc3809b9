# backend/tradelink/models/document.py

from sqlalchemy import Column, String, DateTime, Text, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow
from tradelink.models.enums import DocumentStatus, DocumentType


# ============================================================
# TRADE DOCUMENT (metadata only; file_url is a URL or base64 payload)
# ============================================================
class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    transaction_id = Column(String(36), ForeignKey("transactions.id", ondelete="SET NULL"), nullable=True, index=True)

    name = Column(String, nullable=False)
    type = Column(SAEnum(DocumentType, name="document_type", native_enum=False), nullable=False, index=True)
    file_url = Column(Text, nullable=False)
    description = Column(Text, nullable=True)
    expiry_date = Column(DateTime, nullable=True, index=True)
    status = Column(
        SAEnum(DocumentStatus, name="document_status", native_enum=False),
        nullable=False,
        default=DocumentStatus.PENDING,
        index=True,
    )

    reference_number = Column(String, nullable=True)   # licence / certificate number
    issued_by = Column(String, nullable=True)          # GEPA, GRA, ...

    verified_at = Column(DateTime, nullable=True)
    verified_by = Column(String, nullable=True)
    verification_notes = Column(Text, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", lazy="selectin")

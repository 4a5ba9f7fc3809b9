# backend/tradelink/models/audit_log.py

from sqlalchemy import Column, String, DateTime

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow


class AuditLog(Base):
    __tablename__ = "audit_logs"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    user_id = Column(String, nullable=True)
    entity_type = Column(String, nullable=False)     # "match", "negotiation", "offer", "payment", "document"
    entity_id = Column(String(36), nullable=False, index=True)
    action = Column(String, nullable=False)          # create, accept, reject, respond, status, verify
    detail = Column(String, nullable=True)
    created_at = Column(DateTime, default=utcnow)

# backend/tradelink/models/export_company.py

from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow


class ExportCompany(Base):
    __tablename__ = "export_companies"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    company_name = Column(String, nullable=False)
    registration_no = Column(String, unique=True, nullable=False)
    gepa_license = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    user = relationship("User", lazy="selectin")

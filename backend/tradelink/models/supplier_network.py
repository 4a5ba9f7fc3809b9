# backend/tradelink/models/supplier_network.py

from sqlalchemy import Column, String, Float, Integer, DateTime, Text, ForeignKey, UniqueConstraint, Enum as SAEnum
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow
from tradelink.models.enums import RelationshipStatus, RelationshipType


class SupplierNetwork(Base):
    """An export company's link to a farmer it sources from."""

    __tablename__ = "supplier_networks"
    __table_args__ = (UniqueConstraint("export_company_id", "farmer_id", name="uq_supplier_network_link"),)

    id = Column(String(36), primary_key=True, default=gen_uuid)
    export_company_id = Column(
        String(36), ForeignKey("export_companies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    farmer_id = Column(String(36), ForeignKey("farmers.id", ondelete="CASCADE"), nullable=False, index=True)

    status = Column(
        SAEnum(RelationshipStatus, name="relationship_status", native_enum=False),
        nullable=False,
        default=RelationshipStatus.ACTIVE,
        index=True,
    )
    relationship_type = Column(
        SAEnum(RelationshipType, name="relationship_type", native_enum=False),
        nullable=True,
        default=RelationshipType.DIRECT,
    )
    contract_start_date = Column(DateTime, nullable=True)
    contract_end_date = Column(DateTime, nullable=True)
    notes = Column(Text, nullable=True)

    # refreshed from transactions whenever the network is listed
    total_deals = Column(Integer, nullable=False, default=0)
    total_value = Column(Float, nullable=False, default=0)
    quality_score = Column(Float, nullable=True)
    reliability_score = Column(Float, nullable=True)
    last_deal_date = Column(DateTime, nullable=True)

    added_by = Column(String, nullable=False)
    added_at = Column(DateTime, default=utcnow)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    farmer = relationship("Farmer", lazy="selectin")
    export_company = relationship("ExportCompany", lazy="selectin")

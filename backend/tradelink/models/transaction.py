# backend/tradelink/models/transaction.py

from sqlalchemy import Column, String, Float, DateTime, Text, Boolean, ForeignKey, Enum as SAEnum
from sqlalchemy.orm import relationship

from tradelink.core.database import Base
from tradelink.models.base import gen_uuid, utcnow
from tradelink.models.enums import PaymentMethod, PaymentStatus


class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    match_id = Column(String(36), ForeignKey("matches.id", ondelete="CASCADE"), nullable=False, index=True)

    # DB-unique: one transaction per accepted negotiation
    negotiation_id = Column(String(36), ForeignKey("negotiations.id", ondelete="SET NULL"), unique=True, nullable=True)

    buyer_id = Column(String(36), ForeignKey("buyers.id", ondelete="CASCADE"), nullable=False, index=True)
    export_company_id = Column(String(36), ForeignKey("export_companies.id", ondelete="SET NULL"), nullable=True, index=True)

    quantity = Column(Float, nullable=False)
    agreed_price = Column(Float, nullable=False)
    total_value = Column(Float, nullable=False)
    currency = Column(String, nullable=False, default="USD")

    contract_document = Column(String, nullable=True)
    invoice_document = Column(String, nullable=True)

    payment_status = Column(String, nullable=False, default="pending")   # pending, paid
    shipment_status = Column(String, nullable=False, default="pending")
    payment_date = Column(DateTime, nullable=True)
    shipment_date = Column(DateTime, nullable=True)
    delivery_date = Column(DateTime, nullable=True)

    gcms_reference_no = Column(String, nullable=True)
    exchange_rate = Column(Float, nullable=True)
    local_currency = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    match = relationship("Match", lazy="selectin")
    payment = relationship("Payment", uselist=False, viewonly=True, lazy="selectin")


# ============================================================
# PAYMENT (gateway is stubbed; manual receipts are verified by an admin)
# ============================================================
class Payment(Base):
    __tablename__ = "payments"

    id = Column(String(36), primary_key=True, default=gen_uuid)
    transaction_id = Column(String(36), ForeignKey("transactions.id", ondelete="CASCADE"), unique=True, nullable=False)
    amount = Column(Float, nullable=False)
    currency = Column(String, nullable=False, default="USD")
    exchange_rate = Column(Float, nullable=True)
    payment_method = Column(SAEnum(PaymentMethod, name="payment_method", native_enum=False), nullable=False)
    payment_status = Column(
        SAEnum(PaymentStatus, name="payment_status", native_enum=False),
        nullable=False,
        default=PaymentStatus.PENDING,
    )

    provider = Column(String, nullable=True)
    provider_transaction_id = Column(String, nullable=True)
    provider_response = Column(Text, nullable=True)   # JSON string

    is_manual = Column(Boolean, nullable=False, default=False)
    receipt_document = Column(String, nullable=True)
    receipt_number = Column(String, nullable=True)
    receipt_date = Column(DateTime, nullable=True)
    uploaded_by = Column(String, nullable=True)

    verified_by = Column(String, nullable=True)
    verified_at = Column(DateTime, nullable=True)
    verification_notes = Column(Text, nullable=True)
    paid_at = Column(DateTime, nullable=True)
    failure_reason = Column(String, nullable=True)

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

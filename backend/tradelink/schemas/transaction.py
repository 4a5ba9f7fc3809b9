# backend/tradelink/schemas/transaction.py

from typing import Optional, Dict
from datetime import datetime
from pydantic import Field

from tradelink.models.enums import PaymentMethod, PaymentStatus
from tradelink.schemas.base import CamelModel


# ============================================================
# TRANSACTIONS
# ============================================================

class TransactionBase(CamelModel):
    match_id: str
    buyer_id: str
    export_company_id: Optional[str] = None
    quantity: float = Field(gt=0)
    agreed_price: float = Field(ge=0)
    total_value: float = Field(ge=0)
    currency: Optional[str] = "USD"
    contract_document: Optional[str] = None
    invoice_document: Optional[str] = None
    payment_status: Optional[str] = "pending"
    shipment_status: Optional[str] = "pending"
    payment_date: Optional[datetime] = None
    shipment_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    gcms_reference_no: Optional[str] = None


class TransactionCreate(TransactionBase):
    negotiation_id: Optional[str] = None


class TransactionUpdate(CamelModel):
    export_company_id: Optional[str] = None
    contract_document: Optional[str] = None
    invoice_document: Optional[str] = None
    payment_status: Optional[str] = None
    shipment_status: Optional[str] = None
    payment_date: Optional[datetime] = None
    shipment_date: Optional[datetime] = None
    delivery_date: Optional[datetime] = None
    gcms_reference_no: Optional[str] = None
    exchange_rate: Optional[float] = None
    local_currency: Optional[str] = None


class Transaction(TransactionBase):
    id: str
    negotiation_id: Optional[str] = None
    exchange_rate: Optional[float] = None
    local_currency: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class TransactionStats(CamelModel):
    total: int
    total_value: float
    by_payment_status: Dict[str, int]
    by_shipment_status: Dict[str, int]


# ============================================================
# PAYMENTS
# ============================================================

class PaymentCreate(CamelModel):
    transaction_id: str
    amount: float = Field(gt=0)
    currency: Optional[str] = None
    payment_method: PaymentMethod
    provider: Optional[str] = None
    is_manual: bool = False
    receipt_number: Optional[str] = None
    receipt_date: Optional[datetime] = None


class ReceiptUpload(CamelModel):
    receipt_document: str
    receipt_number: str
    receipt_date: datetime
    notes: Optional[str] = None


class PaymentReview(CamelModel):
    notes: Optional[str] = None


class PaymentCallback(CamelModel):
    status: PaymentStatus
    provider_response: Optional[Dict] = None


class Payment(CamelModel):
    id: str
    transaction_id: str
    amount: float
    currency: str
    exchange_rate: Optional[float] = None
    payment_method: PaymentMethod
    payment_status: PaymentStatus
    provider: Optional[str] = None
    provider_transaction_id: Optional[str] = None
    provider_response: Optional[str] = None
    is_manual: bool
    receipt_document: Optional[str] = None
    receipt_number: Optional[str] = None
    receipt_date: Optional[datetime] = None
    uploaded_by: Optional[str] = None
    verified_by: Optional[str] = None
    verified_at: Optional[datetime] = None
    verification_notes: Optional[str] = None
    paid_at: Optional[datetime] = None
    failure_reason: Optional[str] = None
    created_at: Optional[datetime] = None

# backend/tradelink/services/payment_service.py

"""
Payments against a Transaction.

Gateway payments are not integrated: they are recorded as PROCESSING with a
stub provider response and settled through the provider callback. Manual
(port / bank receipt) payments stay PENDING until an admin verifies them.
"""

import json
from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.config import settings
from tradelink.core.exceptions import InvalidStateError, NotFoundError
from tradelink.core.logger import get_logger
from tradelink.crud import transactions as transaction_crud
from tradelink.crud.audit_log import create_audit_log
from tradelink.models.enums import PaymentStatus
from tradelink.models.transaction import Payment
from tradelink.services.profile_service import get_profiles

logger = get_logger(__name__)


async def _mark_transaction_paid(db: AsyncSession, transaction_id: str) -> None:
    transaction = await transaction_crud.get_transaction(db, transaction_id)
    if transaction:
        await transaction_crud.update_transaction(db, transaction, {
            "payment_status": "paid",
            "payment_date": datetime.utcnow(),
        })


async def create_payment(db: AsyncSession, data: Dict[str, Any], user_id: str) -> Payment:
    transaction = await transaction_crud.get_transaction(db, data["transaction_id"])
    if not transaction:
        raise NotFoundError("Transaction not found")
    if transaction.payment:
        raise InvalidStateError("Payment already exists for this transaction")

    is_manual = bool(data.get("is_manual"))
    record = {
        "transaction_id": transaction.id,
        "amount": data["amount"],
        "currency": data.get("currency") or settings.DEFAULT_CURRENCY,
        "payment_method": data["payment_method"],
        "provider": data.get("provider"),
        "is_manual": is_manual,
        "receipt_number": data.get("receipt_number"),
        "receipt_date": data.get("receipt_date"),
        "payment_status": PaymentStatus.PENDING,
        "uploaded_by": user_id if is_manual else None,
    }

    if not is_manual:
        record["payment_status"] = PaymentStatus.PROCESSING
        record["provider_response"] = json.dumps({
            "status": "initiated",
            "provider": data.get("provider"),
            "timestamp": datetime.utcnow().isoformat(),
        })

    payment = await transaction_crud.create_payment(db, record)
    await create_audit_log(db, user_id, "payment", payment.id, "create", payment.payment_status.value)
    logger.info(f"Payment created: {payment.id}", extra={"user_id": user_id, "entity_id": transaction.id})
    return payment


async def list_payments(
    db: AsyncSession,
    transaction_id: Optional[str] = None,
    user_id: Optional[str] = None,
) -> List[Payment]:
    if not user_id:
        return await transaction_crud.list_payments(db, transaction_id=transaction_id)

    farmer, buyer = await get_profiles(db, user_id)
    if not farmer and not buyer:
        return []

    return await transaction_crud.list_payments(
        db,
        transaction_id=transaction_id,
        buyer_id=buyer.id if buyer else None,
        farmer_id=farmer.id if farmer else None,
    )


async def get_payment(db: AsyncSession, payment_id: str) -> Payment:
    payment = await transaction_crud.get_payment(db, payment_id)
    if not payment:
        raise NotFoundError("Payment not found")
    return payment


async def upload_receipt(db: AsyncSession, payment_id: str, data: Dict[str, Any], user_id: str) -> Payment:
    payment = await get_payment(db, payment_id)
    if not payment.is_manual:
        raise InvalidStateError("This payment is not a manual payment")

    # back to PENDING until an admin verifies the receipt
    return await transaction_crud.update_payment(db, payment, {
        "receipt_document": data["receipt_document"],
        "receipt_number": data["receipt_number"],
        "receipt_date": data["receipt_date"],
        "uploaded_by": user_id,
        "payment_status": PaymentStatus.PENDING,
    })


async def verify_manual_payment(db: AsyncSession, payment_id: str, verified_by: str, notes: Optional[str] = None) -> Payment:
    payment = await get_payment(db, payment_id)
    if not payment.is_manual:
        raise InvalidStateError("This payment is not a manual payment")

    now = datetime.utcnow()
    payment = await transaction_crud.update_payment(db, payment, {
        "payment_status": PaymentStatus.VERIFIED,
        "verified_by": verified_by,
        "verified_at": now,
        "verification_notes": notes,
        "paid_at": now,
    })
    await _mark_transaction_paid(db, payment.transaction_id)

    await create_audit_log(db, verified_by, "payment", payment.id, "verify", notes or "")
    return payment


async def reject_manual_payment(db: AsyncSession, payment_id: str, verified_by: str, notes: Optional[str] = None) -> Payment:
    payment = await get_payment(db, payment_id)

    payment = await transaction_crud.update_payment(db, payment, {
        "payment_status": PaymentStatus.REJECTED,
        "verified_by": verified_by,
        "verified_at": datetime.utcnow(),
        "verification_notes": notes,
    })

    await create_audit_log(db, verified_by, "payment", payment.id, "reject", notes or "")
    return payment


async def process_payment_callback(
    db: AsyncSession,
    payment_id: str,
    status: PaymentStatus,
    provider_response: Optional[Dict[str, Any]] = None,
) -> Payment:
    payment = await get_payment(db, payment_id)

    payment = await transaction_crud.update_payment(db, payment, {
        "payment_status": status,
        "provider_response": json.dumps(provider_response) if provider_response else payment.provider_response,
        "paid_at": datetime.utcnow() if status == PaymentStatus.COMPLETED else None,
        "failure_reason": "Payment failed" if status == PaymentStatus.FAILED else None,
    })

    if status == PaymentStatus.COMPLETED:
        await _mark_transaction_paid(db, payment.transaction_id)

    logger.info(f"Payment callback: {payment.id} -> {status.value}", extra={"entity_id": payment.id})
    return payment

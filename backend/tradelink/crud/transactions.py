# backend/tradelink/crud/transactions.py

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates, paginate
from tradelink.models.match import Match
from tradelink.models.transaction import Transaction, Payment


# ============================================================
# TRANSACTIONS
# ============================================================

async def create_transaction(db: AsyncSession, data: Dict[str, Any]) -> Transaction:
    transaction = Transaction(**data)
    db.add(transaction)
    await db.commit()
    return await get_transaction(db, transaction.id)


async def get_transaction(db: AsyncSession, transaction_id: str) -> Optional[Transaction]:
    return await db.scalar(
        select(Transaction)
        .where(Transaction.id == transaction_id)
        .execution_options(populate_existing=True)
    )


async def get_transaction_by_negotiation(db: AsyncSession, negotiation_id: str) -> Optional[Transaction]:
    return await db.scalar(select(Transaction).where(Transaction.negotiation_id == negotiation_id))


async def count_transactions_for_negotiation(db: AsyncSession, negotiation_id: str) -> int:
    return await db.scalar(
        select(func.count()).select_from(Transaction).where(Transaction.negotiation_id == negotiation_id)
    ) or 0


async def list_transactions(
    db: AsyncSession,
    buyer_id: Optional[str] = None,
    export_company_id: Optional[str] = None,
    payment_status: Optional[str] = None,
    shipment_status: Optional[str] = None,
    negotiation_id: Optional[str] = None,
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Transaction], int]:
    q = select(Transaction)
    if buyer_id:
        q = q.where(Transaction.buyer_id == buyer_id)
    if export_company_id:
        q = q.where(Transaction.export_company_id == export_company_id)
    if payment_status:
        q = q.where(Transaction.payment_status == payment_status)
    if shipment_status:
        q = q.where(Transaction.shipment_status == shipment_status)
    if negotiation_id:
        q = q.where(Transaction.negotiation_id == negotiation_id)
    q = q.order_by(Transaction.created_at.desc())
    return await paginate(db, q, page, limit)


async def update_transaction(db: AsyncSession, transaction: Transaction, updates: Dict[str, Any]) -> Transaction:
    apply_updates(transaction, updates)
    await db.commit()
    return await get_transaction(db, transaction.id)


async def delete_transaction(db: AsyncSession, transaction: Transaction) -> None:
    await db.delete(transaction)
    await db.commit()


async def transaction_stats(db: AsyncSession) -> Dict[str, Any]:
    total = await db.scalar(select(func.count()).select_from(Transaction))
    total_value = await db.scalar(select(func.sum(Transaction.total_value)))

    by_payment = await db.execute(
        select(Transaction.payment_status, func.count()).group_by(Transaction.payment_status)
    )
    by_shipment = await db.execute(
        select(Transaction.shipment_status, func.count()).group_by(Transaction.shipment_status)
    )

    return {
        "total": total or 0,
        "total_value": float(total_value or 0),
        "by_payment_status": {status: count for status, count in by_payment.all()},
        "by_shipment_status": {status: count for status, count in by_shipment.all()},
    }


# ============================================================
# PAYMENTS
# ============================================================

async def create_payment(db: AsyncSession, data: Dict[str, Any]) -> Payment:
    payment = Payment(**data)
    db.add(payment)
    await db.commit()
    await db.refresh(payment)
    return payment


async def get_payment(db: AsyncSession, payment_id: str) -> Optional[Payment]:
    return await db.get(Payment, payment_id)


async def list_payments(
    db: AsyncSession,
    transaction_id: Optional[str] = None,
    buyer_id: Optional[str] = None,
    farmer_id: Optional[str] = None,
) -> List[Payment]:
    q = select(Payment)
    if transaction_id:
        q = q.where(Payment.transaction_id == transaction_id)
    if buyer_id or farmer_id:
        access = []
        if buyer_id:
            access.append(Transaction.buyer_id == buyer_id)
        if farmer_id:
            access.append(Match.farmer_id == farmer_id)
        q = (
            q.join(Transaction, Transaction.id == Payment.transaction_id)
            .join(Match, Match.id == Transaction.match_id)
            .where(or_(*access))
        )
    rows = await db.scalars(q.order_by(Payment.created_at.desc()))
    return rows.all()


async def update_payment(db: AsyncSession, payment: Payment, updates: Dict[str, Any]) -> Payment:
    apply_updates(payment, updates)
    await db.commit()
    await db.refresh(payment)
    return payment

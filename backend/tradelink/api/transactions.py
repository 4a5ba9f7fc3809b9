# backend/tradelink/api/transactions.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user
from tradelink.core.database import get_db
from tradelink.crud import transactions as transaction_crud
from tradelink.crud.common import page_meta
from tradelink.schemas.base import Message, Page
from tradelink.schemas.transaction import Transaction, TransactionCreate, TransactionStats, TransactionUpdate

router = APIRouter(prefix="/transactions", tags=["transactions"])


async def _get_or_404(db: AsyncSession, transaction_id: str):
    transaction = await transaction_crud.get_transaction(db, transaction_id)
    if not transaction:
        raise HTTPException(status_code=404, detail="Transaction not found")
    return transaction


@router.post("", response_model=Transaction, status_code=status.HTTP_201_CREATED)
async def create_transaction(payload: TransactionCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    if payload.negotiation_id and await transaction_crud.get_transaction_by_negotiation(db, payload.negotiation_id):
        raise HTTPException(status_code=400, detail="Transaction already exists for this negotiation")
    return await transaction_crud.create_transaction(db, payload.model_dump())


@router.get("", response_model=Page[Transaction])
async def list_transactions(
    buyer_id: Optional[str] = Query(None, alias="buyerId"),
    export_company_id: Optional[str] = Query(None, alias="exportCompanyId"),
    payment_status: Optional[str] = Query(None, alias="paymentStatus"),
    shipment_status: Optional[str] = Query(None, alias="shipmentStatus"),
    negotiation_id: Optional[str] = Query(None, alias="negotiationId"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    rows, total = await transaction_crud.list_transactions(
        db,
        buyer_id=buyer_id,
        export_company_id=export_company_id,
        payment_status=payment_status,
        shipment_status=shipment_status,
        negotiation_id=negotiation_id,
        page=page,
        limit=limit,
    )
    return {"data": rows, "meta": page_meta(total, page, limit)}


@router.get("/stats", response_model=TransactionStats)
async def transaction_stats(db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await transaction_crud.transaction_stats(db)


@router.get("/{transaction_id}", response_model=Transaction)
async def get_transaction(transaction_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await _get_or_404(db, transaction_id)


@router.patch("/{transaction_id}", response_model=Transaction)
async def update_transaction(
    transaction_id: str,
    payload: TransactionUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    transaction = await _get_or_404(db, transaction_id)
    return await transaction_crud.update_transaction(db, transaction, payload.model_dump(exclude_unset=True))


@router.delete("/{transaction_id}", response_model=Message)
async def delete_transaction(transaction_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    transaction = await _get_or_404(db, transaction_id)
    await transaction_crud.delete_transaction(db, transaction)
    return {"message": "Transaction deleted"}

# backend/tradelink/api/payments.py

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user, require_roles
from tradelink.core.database import get_db
from tradelink.schemas.transaction import Payment, PaymentCallback, PaymentCreate, PaymentReview, ReceiptUpload
from tradelink.services import payment_service

router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("", response_model=Payment, status_code=status.HTTP_201_CREATED)
async def create_payment(payload: PaymentCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await payment_service.create_payment(db, payload.model_dump(), user["sub"])


@router.get("", response_model=List[Payment])
async def list_payments(
    transaction_id: Optional[str] = Query(None, alias="transactionId"),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    # admins see everything; other users only payments on their own trades
    user_id = None if user.get("role") == "ADMIN" else user["sub"]
    return await payment_service.list_payments(db, transaction_id=transaction_id, user_id=user_id)


@router.get("/{payment_id}", response_model=Payment)
async def get_payment(payment_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await payment_service.get_payment(db, payment_id)


@router.post("/{payment_id}/receipt", response_model=Payment)
async def upload_receipt(
    payment_id: str,
    payload: ReceiptUpload,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await payment_service.upload_receipt(db, payment_id, payload.model_dump(), user["sub"])


@router.post("/{payment_id}/verify", response_model=Payment)
async def verify_payment(
    payment_id: str,
    payload: PaymentReview,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_roles("ADMIN")),
):
    return await payment_service.verify_manual_payment(db, payment_id, user["sub"], payload.notes)


@router.post("/{payment_id}/reject", response_model=Payment)
async def reject_payment(
    payment_id: str,
    payload: PaymentReview,
    db: AsyncSession = Depends(get_db),
    user=Depends(require_roles("ADMIN")),
):
    return await payment_service.reject_manual_payment(db, payment_id, user["sub"], payload.notes)


@router.post("/{payment_id}/callback", response_model=Payment)
async def payment_callback(
    payment_id: str,
    payload: PaymentCallback,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await payment_service.process_payment_callback(db, payment_id, payload.status, payload.provider_response)

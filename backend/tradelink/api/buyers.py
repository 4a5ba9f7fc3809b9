# backend/tradelink/api/buyers.py

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user
from tradelink.core.database import get_db
from tradelink.crud import buyers as buyer_crud
from tradelink.crud.common import page_meta
from tradelink.schemas.base import Message, Page
from tradelink.schemas.buyer import Buyer, BuyerCreate, BuyerUpdate

router = APIRouter(prefix="/buyers", tags=["buyers"])


async def _get_or_404(db: AsyncSession, buyer_id: str):
    buyer = await buyer_crud.get_buyer(db, buyer_id)
    if not buyer:
        raise HTTPException(status_code=404, detail="Buyer not found")
    return buyer


@router.post("", response_model=Buyer, status_code=status.HTTP_201_CREATED)
async def create_buyer(payload: BuyerCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    if await buyer_crud.get_buyer_by_user(db, payload.user_id):
        raise HTTPException(status_code=400, detail="Buyer profile already exists for this user")
    return await buyer_crud.create_buyer(db, payload.model_dump())


@router.get("", response_model=Page[Buyer])
async def list_buyers(
    country: Optional[str] = None,
    industry: Optional[str] = None,
    seeking_crops: Optional[List[str]] = Query(None, alias="seekingCrops"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    rows, total = await buyer_crud.list_buyers(
        db, country=country, industry=industry, seeking_crops=seeking_crops, page=page, limit=limit
    )
    return {"data": rows, "meta": page_meta(total, page, limit)}


@router.get("/user/{user_id}", response_model=Buyer)
async def get_buyer_by_user(user_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    buyer = await buyer_crud.get_buyer_by_user(db, user_id)
    if not buyer:
        raise HTTPException(status_code=404, detail="Buyer not found")
    return buyer


@router.get("/{buyer_id}", response_model=Buyer)
async def get_buyer(buyer_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await _get_or_404(db, buyer_id)


@router.patch("/{buyer_id}", response_model=Buyer)
async def update_buyer(
    buyer_id: str,
    payload: BuyerUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    buyer = await _get_or_404(db, buyer_id)
    return await buyer_crud.update_buyer(db, buyer, payload.model_dump(exclude_unset=True))


@router.delete("/{buyer_id}", response_model=Message)
async def delete_buyer(buyer_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    buyer = await _get_or_404(db, buyer_id)
    await buyer_crud.delete_buyer(db, buyer)
    return {"message": "Buyer deleted"}

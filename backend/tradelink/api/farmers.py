# backend/tradelink/api/farmers.py

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user
from tradelink.core.database import get_db
from tradelink.crud import farmers as farmer_crud
from tradelink.crud.common import page_meta
from tradelink.schemas.base import Message, Page
from tradelink.schemas.farmer import Farmer, FarmerCreate, FarmerUpdate

router = APIRouter(prefix="/farmers", tags=["farmers"])


async def _get_or_404(db: AsyncSession, farmer_id: str):
    farmer = await farmer_crud.get_farmer(db, farmer_id)
    if not farmer:
        raise HTTPException(status_code=404, detail="Farmer not found")
    return farmer


@router.post("", response_model=Farmer, status_code=status.HTTP_201_CREATED)
async def create_farmer(payload: FarmerCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    if await farmer_crud.get_farmer_by_user(db, payload.user_id):
        raise HTTPException(status_code=400, detail="Farmer profile already exists for this user")
    return await farmer_crud.create_farmer(db, payload.model_dump())


@router.get("", response_model=Page[Farmer])
async def list_farmers(
    region: Optional[str] = None,
    district: Optional[str] = None,
    verified: Optional[bool] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    rows, total = await farmer_crud.list_farmers(
        db, region=region, district=district, verified=verified, page=page, limit=limit
    )
    return {"data": rows, "meta": page_meta(total, page, limit)}


@router.get("/user/{user_id}", response_model=Farmer)
async def get_farmer_by_user(user_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    farmer = await farmer_crud.get_farmer_by_user(db, user_id)
    if not farmer:
        raise HTTPException(status_code=404, detail="Farmer not found")
    return farmer


@router.get("/{farmer_id}", response_model=Farmer)
async def get_farmer(farmer_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await _get_or_404(db, farmer_id)


@router.patch("/{farmer_id}", response_model=Farmer)
async def update_farmer(
    farmer_id: str,
    payload: FarmerUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    farmer = await _get_or_404(db, farmer_id)
    return await farmer_crud.update_farmer(db, farmer, payload.model_dump(exclude_unset=True))


@router.delete("/{farmer_id}", response_model=Message)
async def delete_farmer(farmer_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    farmer = await _get_or_404(db, farmer_id)
    await farmer_crud.delete_farmer(db, farmer)
    return {"message": "Farmer deleted"}

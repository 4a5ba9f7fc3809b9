# backend/tradelink/api/listings.py

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.auth import get_current_user
from tradelink.core.database import get_db
from tradelink.crud import listings as listing_crud
from tradelink.crud.common import page_meta
from tradelink.models.enums import ListingStatus, QualityGrade
from tradelink.schemas.base import Message, Page
from tradelink.schemas.listing import Listing, ListingCreate, ListingUpdate
from tradelink.services import listing_service

router = APIRouter(prefix="/listings", tags=["listings"])


@router.post("", response_model=Listing, status_code=status.HTTP_201_CREATED)
async def create_listing(payload: ListingCreate, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await listing_service.create_listing(db, payload.model_dump(), user["sub"])


@router.get("", response_model=Page[Listing])
async def list_listings(
    crop_type: Optional[str] = Query(None, alias="cropType"),
    quality_grade: Optional[QualityGrade] = Query(None, alias="qualityGrade"),
    listing_status: Optional[ListingStatus] = Query(None, alias="status"),
    region: Optional[str] = None,
    min_price: Optional[float] = Query(None, alias="minPrice"),
    max_price: Optional[float] = Query(None, alias="maxPrice"),
    available_from: Optional[datetime] = Query(None, alias="availableFrom"),
    available_until: Optional[datetime] = Query(None, alias="availableUntil"),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: str = Query("desc", alias="sortOrder", pattern="^(asc|desc)$"),
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    rows, total = await listing_crud.list_listings(
        db,
        crop_type=crop_type,
        quality_grade=quality_grade,
        status=listing_status,
        region=region,
        min_price=min_price,
        max_price=max_price,
        available_from=available_from,
        available_until=available_until,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return {"data": rows, "meta": page_meta(total, page, limit)}


@router.get("/search", response_model=List[Listing])
async def search_listings(q: str = Query(..., min_length=1), db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await listing_crud.search_listings(db, q)


@router.get("/{listing_id}", response_model=Listing)
async def get_listing(listing_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    return await listing_service.get_listing(db, listing_id)


@router.patch("/{listing_id}", response_model=Listing)
async def update_listing(
    listing_id: str,
    payload: ListingUpdate,
    db: AsyncSession = Depends(get_db),
    user=Depends(get_current_user),
):
    return await listing_service.update_listing(db, listing_id, payload.model_dump(exclude_unset=True), user["sub"])


@router.delete("/{listing_id}", response_model=Message)
async def delete_listing(listing_id: str, db: AsyncSession = Depends(get_db), user=Depends(get_current_user)):
    await listing_service.delete_listing(db, listing_id, user["sub"])
    return {"message": "Listing deleted"}

# backend/tradelink/crud/listings.py

from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.crud.common import apply_updates, paginate
from tradelink.models.enums import ListingStatus
from tradelink.models.farmer import Farmer
from tradelink.models.listing import Listing
from tradelink.models.user import User

SORTABLE_FIELDS = {
    "createdAt": Listing.created_at,
    "created_at": Listing.created_at,
    "pricePerUnit": Listing.price_per_unit,
    "price_per_unit": Listing.price_per_unit,
    "quantity": Listing.quantity,
    "availableFrom": Listing.available_from,
    "available_from": Listing.available_from,
    "cropType": Listing.crop_type,
    "crop_type": Listing.crop_type,
}


async def create_listing(db: AsyncSession, farmer_id: str, data: Dict[str, Any]) -> Listing:
    if data.get("status") is None:
        data.pop("status", None)
    listing = Listing(farmer_id=farmer_id, **data)
    db.add(listing)
    await db.commit()
    return await get_listing(db, listing.id)


async def get_listing(db: AsyncSession, listing_id: str) -> Optional[Listing]:
    return await db.scalar(
        select(Listing)
        .where(Listing.id == listing_id)
        .execution_options(populate_existing=True)
    )


async def list_listings(
    db: AsyncSession,
    crop_type: Optional[str] = None,
    quality_grade: Optional[str] = None,
    status: Optional[str] = None,
    region: Optional[str] = None,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    available_from: Optional[datetime] = None,
    available_until: Optional[datetime] = None,
    sort_by: Optional[str] = None,
    sort_order: str = "desc",
    page: int = 1,
    limit: int = 20,
) -> Tuple[List[Listing], int]:
    q = select(Listing).where(Listing.status == (status or ListingStatus.ACTIVE.value))

    if crop_type:
        q = q.where(Listing.crop_type == crop_type)
    if quality_grade:
        q = q.where(Listing.quality_grade == quality_grade)
    if min_price is not None:
        q = q.where(Listing.price_per_unit >= min_price)
    if max_price is not None:
        q = q.where(Listing.price_per_unit <= max_price)
    if available_from:
        q = q.where(Listing.available_from >= available_from)
    if available_until:
        q = q.where(Listing.available_until <= available_until)
    if region:
        q = q.join(Farmer, Farmer.id == Listing.farmer_id).where(Farmer.region == region)

    column = SORTABLE_FIELDS.get(sort_by or "createdAt", Listing.created_at)
    q = q.order_by(column.asc() if sort_order == "asc" else column.desc())

    return await paginate(db, q, page, limit)


async def list_listings_for_matching(db: AsyncSession, verified_only: bool = False) -> List[Listing]:
    """ACTIVE listings with farmer + user loaded; optionally only verified sellers."""
    q = select(Listing).where(Listing.status == ListingStatus.ACTIVE.value)
    if verified_only:
        q = (
            q.join(Farmer, Farmer.id == Listing.farmer_id)
            .join(User, User.id == Farmer.user_id)
            .where(User.verified.is_(True))
        )
    rows = await db.scalars(q.order_by(Listing.created_at).execution_options(populate_existing=True))
    return rows.all()


async def search_listings(db: AsyncSession, query: str, limit: int = 20) -> List[Listing]:
    pattern = f"%{query}%"
    rows = await db.scalars(
        select(Listing)
        .where(
            Listing.status == ListingStatus.ACTIVE.value,
            or_(
                Listing.crop_type.ilike(pattern),
                Listing.crop_variety.ilike(pattern),
                Listing.description.ilike(pattern),
            ),
        )
        .limit(limit)
    )
    return rows.all()


async def update_listing(db: AsyncSession, listing: Listing, updates: Dict[str, Any]) -> Listing:
    apply_updates(listing, updates)
    await db.commit()
    return await get_listing(db, listing.id)


async def delete_listing(db: AsyncSession, listing: Listing) -> None:
    await db.delete(listing)
    await db.commit()

# backend/tradelink/services/listing_service.py

from typing import Any, Dict

from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.exceptions import ForbiddenError, NotFoundError
from tradelink.core.logger import get_logger
from tradelink.crud import listings as listing_crud
from tradelink.crud.farmers import get_farmer_by_user
from tradelink.models.listing import Listing
from tradelink.services.profile_service import ensure_farmer_profile

logger = get_logger(__name__)


async def create_listing(db: AsyncSession, data: Dict[str, Any], user_id: str) -> Listing:
    farmer = await ensure_farmer_profile(db, user_id)
    listing = await listing_crud.create_listing(db, farmer.id, data)
    logger.info(f"Listing created: {listing.id}", extra={"user_id": user_id, "entity_id": listing.id})
    return listing


async def get_listing(db: AsyncSession, listing_id: str) -> Listing:
    listing = await listing_crud.get_listing(db, listing_id)
    if not listing:
        raise NotFoundError("Listing not found")
    return listing


async def _owned_listing(db: AsyncSession, listing_id: str, user_id: str) -> Listing:
    listing = await get_listing(db, listing_id)
    farmer = await get_farmer_by_user(db, user_id)
    if not farmer or listing.farmer_id != farmer.id:
        raise ForbiddenError("You can only modify your own listings")
    return listing


async def update_listing(db: AsyncSession, listing_id: str, updates: Dict[str, Any], user_id: str) -> Listing:
    listing = await _owned_listing(db, listing_id, user_id)
    return await listing_crud.update_listing(db, listing, updates)


async def delete_listing(db: AsyncSession, listing_id: str, user_id: str) -> None:
    listing = await _owned_listing(db, listing_id, user_id)
    await listing_crud.delete_listing(db, listing)
    logger.info(f"Listing deleted: {listing_id}", extra={"user_id": user_id, "entity_id": listing_id})

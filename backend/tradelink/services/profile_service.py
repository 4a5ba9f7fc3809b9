# backend/tradelink/services/profile_service.py

"""
Farmer, buyer and export company profile lookup for the calling user.

Listing and match creation auto-create a default profile for users whose
role allows one; other roles are refused.
"""

from typing import Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from tradelink.core.config import settings
from tradelink.core.exceptions import ForbiddenError, InvalidStateError, NotFoundError
from tradelink.core.logger import get_logger
from tradelink.crud import buyers as buyer_crud
from tradelink.crud import farmers as farmer_crud
from tradelink.crud.export_companies import get_export_company_by_user
from tradelink.crud.users import get_user
from tradelink.models.buyer import Buyer
from tradelink.models.enums import UserRole
from tradelink.models.export_company import ExportCompany
from tradelink.models.farmer import Farmer

logger = get_logger(__name__)


async def get_profiles(db: AsyncSession, user_id: str) -> Tuple[Optional[Farmer], Optional[Buyer]]:
    farmer = await farmer_crud.get_farmer_by_user(db, user_id)
    buyer = await buyer_crud.get_buyer_by_user(db, user_id)
    return farmer, buyer


async def ensure_farmer_profile(db: AsyncSession, user_id: str) -> Farmer:
    farmer = await farmer_crud.get_farmer_by_user(db, user_id)
    if farmer:
        return farmer

    user = await get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    if user.role != UserRole.FARMER:
        raise ForbiddenError("Only farmers can create listings")

    farmer = await farmer_crud.create_farmer(db, {
        "user_id": user.id,
        "business_name": user.full_name,
        "location": "Ghana",
        "district": "Unknown",
        "region": "Unknown",
        "certifications": [],
    })
    logger.info(f"Farmer profile created: {farmer.id}", extra={"user_id": user.id, "entity_id": farmer.id})
    return farmer


async def ensure_buyer_profile(db: AsyncSession, user_id: str) -> Buyer:
    buyer = await buyer_crud.get_buyer_by_user(db, user_id)
    if buyer:
        return buyer

    user = await get_user(db, user_id)
    if not user:
        raise NotFoundError("User not found")
    if user.role != UserRole.BUYER:
        raise InvalidStateError("Only buyers can create matches. Please provide a buyerId.")

    buyer = await buyer_crud.create_buyer(db, {
        "user_id": user.id,
        "company_name": user.full_name,
        "country": settings.HOME_COUNTRY,
        "country_name": "Ghana",
        "industry": "Agriculture",
        "seeking_crops": [],
        "quality_standards": [],
    })
    logger.info(f"Buyer profile created: {buyer.id}", extra={"user_id": user.id, "entity_id": buyer.id})
    return buyer


async def get_export_company_for_user(db: AsyncSession, user_id: str) -> ExportCompany:
    company = await get_export_company_by_user(db, user_id)
    if not company:
        raise NotFoundError("Export company profile not found")
    return company

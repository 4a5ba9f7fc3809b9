import json
from datetime import datetime, timedelta

import pytest

from tradelink.core.exceptions import InvalidStateError, NotFoundError
from tradelink.crud.buyers import get_buyer_by_user
from tradelink.models import Buyer, Farmer, Listing
from tradelink.models.enums import MatchStatus, QualityGrade, UserRole
from tradelink.services import match_service
from tradelink.services.ai_client import AiClient

from conftest import add_user


@pytest.fixture
async def unverified_listing(db, marketplace):
    user = await add_user(db, "newfarmer@example.com", UserRole.FARMER, verified=False)
    farmer = Farmer(user_id=user.id, location="Tamale", district="Tamale Metro", region="Northern")
    db.add(farmer)
    await db.commit()

    listing = Listing(
        farmer_id=farmer.id,
        crop_type="Cocoa",
        quantity=10,
        unit="tons",
        quality_grade=QualityGrade.PREMIUM,
        price_per_unit=2300,
        available_from=datetime.utcnow() - timedelta(days=2),
    )
    db.add(listing)
    await db.commit()
    return listing


async def test_suggest_matches_persists_suggested_matches(db, marketplace, unverified_listing):
    matches = await match_service.suggest_matches(db, marketplace.buyer.id, ai_client=AiClient(api_key=None))

    assert [m.listing_id for m in matches] == [marketplace.listing.id, unverified_listing.id]
    best = matches[0]
    assert best.status == MatchStatus.SUGGESTED
    assert best.compatibility_score == 100
    assert best.estimated_value == 12 * 2500
    assert best.farmer_id == marketplace.farmer.id
    assert "Crop type matches buyer requirements: Cocoa" in json.loads(best.ai_recommendation)


async def test_suggest_matches_for_international_buyer_skips_unverified(db, marketplace, unverified_listing):
    user = await add_user(db, "importer@example.com", UserRole.BUYER)
    buyer = Buyer(
        user_id=user.id,
        company_name="Hamburg Chocolate GmbH",
        country="DE",
        industry="Confectionery",
        seeking_crops=["Cocoa"],
        volume_required="10 tons",
        quality_standards=["PREMIUM"],
    )
    db.add(buyer)
    await db.commit()

    matches = await match_service.suggest_matches(db, buyer.id)
    assert [m.listing_id for m in matches] == [marketplace.listing.id]


async def test_suggest_matches_unknown_buyer(db):
    with pytest.raises(NotFoundError):
        await match_service.suggest_matches(db, "missing")


async def test_list_matches_sorted_by_score_with_meta(db, marketplace, unverified_listing):
    await match_service.suggest_matches(db, marketplace.buyer.id)

    page = await match_service.list_matches(db, buyer_id=marketplace.buyer.id, page=1, limit=1)
    assert page["meta"] == {"total": 2, "page": 1, "limit": 1, "total_pages": 2}
    assert page["data"][0].listing_id == marketplace.listing.id


async def test_create_match_defaults(db, marketplace):
    match = await match_service.create_match(
        db, {"listing_id": marketplace.listing.id, "buyer_id": marketplace.buyer.id}, marketplace.buyer_user.id
    )
    assert match.status == MatchStatus.CONTACTED
    assert match.contacted_at is not None
    assert match.compatibility_score == 85
    assert match.estimated_value == 30000
    assert match.farmer_id == marketplace.farmer.id


async def test_create_match_creates_buyer_profile_for_buyer_user(db, marketplace):
    user = await add_user(db, "fresh-buyer@example.com", UserRole.BUYER)

    match = await match_service.create_match(db, {"listing_id": marketplace.listing.id}, user.id)

    buyer = await get_buyer_by_user(db, user.id)
    assert buyer is not None
    assert buyer.country == "GH"
    assert match.buyer_id == buyer.id


async def test_create_match_refuses_non_buyer_without_buyer_id(db, marketplace):
    with pytest.raises(InvalidStateError):
        await match_service.create_match(db, {"listing_id": marketplace.listing.id}, marketplace.farmer_user.id)


async def test_create_match_unknown_listing(db, marketplace):
    with pytest.raises(NotFoundError):
        await match_service.create_match(
            db, {"listing_id": "missing", "buyer_id": marketplace.buyer.id}, marketplace.buyer_user.id
        )


async def test_status_update_stamps_each_stage_once(db, match):
    first = await match_service.update_match_status(db, match.id, MatchStatus.COMPLETED)
    stamped = first.completed_at
    assert stamped is not None

    await match_service.update_match_status(db, match.id, MatchStatus.CANCELLED)
    again = await match_service.update_match_status(db, match.id, MatchStatus.COMPLETED)
    assert again.status == MatchStatus.COMPLETED
    assert again.completed_at == stamped


async def test_delete_match(db, match):
    await match_service.delete_match(db, match.id)
    with pytest.raises(NotFoundError):
        await match_service.get_match(db, match.id)

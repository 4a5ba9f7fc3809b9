# backend/tradelink/services/matching_service.py

"""
Buyer / listing compatibility scoring.

Weighted, additive rules (capped at 100):
 - verification gate: unverified seller + international buyer -> 0,
   unverified + domestic -> -20, verified -> +5
 - crop: exact match 30, listing crop containing a seeking crop 15
 - quality grade overlap 25 (premium fallback 20)
 - volume fit up to 20 (free-text requirement parsed with VOLUME_PATTERN)
 - price present 10
 - availability up to 10

The partial crop rule only checks whether the *listing* crop contains the
buyer's seeking crop, never the reverse.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterable, List, Optional, Tuple

from tradelink.core.config import settings
from tradelink.core.logger import get_logger

logger = get_logger(__name__)

MAX_SCORE = 100
MIN_MATCH_SCORE = 30

VERIFIED_BONUS = 5
UNVERIFIED_PENALTY = 20
EXACT_CROP_POINTS = 30
PARTIAL_CROP_POINTS = 15
QUALITY_POINTS = 25
PREMIUM_FALLBACK_POINTS = 20
NO_VOLUME_REQUIREMENT_POINTS = 10
PRICE_POINTS = 10

# (low, high, points), checked in order, bounds inclusive
VOLUME_BANDS = (
    (0.8, 1.2, 20),
    (0.5, 2.0, 15),
    (0.3, 3.0, 10),
)

# (max days until available, points)
AVAILABILITY_BANDS = (
    (30, 7),
    (90, 4),
)
AVAILABLE_NOW_POINTS = 10

VOLUME_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(tons?|kg|tonnes?)", re.IGNORECASE)


@dataclass
class MatchResult:
    listing_id: str
    farmer_id: str
    score: float
    estimated_value: float
    reasons: List[str] = field(default_factory=list)


# ----------------------------------------------------------
# HELPERS
# ----------------------------------------------------------

def _text(value: Any) -> str:
    """Plain string for enums and None."""
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def format_quantity(quantity: Any) -> str:
    """Whole numbers without a trailing .0, everything else printed in full."""
    if quantity is None:
        return ""
    value = float(quantity)
    return str(int(value)) if value.is_integer() else repr(value)


def _naive_utc(value: datetime) -> datetime:
    if value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_volume(volume: Optional[str]) -> Optional[Tuple[float, str]]:
    """
    "10 tons/month" -> (10.0, "ton"), "500kg" -> (500.0, "kg").
    Anything without a ton/tonne/kg token returns None.
    """
    if not volume:
        return None
    m = VOLUME_PATTERN.search(volume)
    if not m:
        return None
    unit = m.group(2).lower()
    if unit.endswith("s"):
        unit = unit[:-1]
    return float(m.group(1)), unit


def is_international(buyer: Any, home_country: Optional[str] = None) -> bool:
    home = home_country or settings.HOME_COUNTRY
    country = getattr(buyer, "country", None)
    return bool(country) and country != home


def seller_verified(listing: Any) -> bool:
    farmer = getattr(listing, "farmer", None)
    user = getattr(farmer, "user", None)
    return bool(getattr(user, "verified", False))


def exact_crop_match(buyer: Any, listing: Any) -> bool:
    crop = _text(listing.crop_type).lower()
    return any(c.lower() == crop for c in (buyer.seeking_crops or []))


def partial_crop_match(buyer: Any, listing: Any) -> bool:
    crop = _text(listing.crop_type).lower()
    return any(c.lower() in crop for c in (buyer.seeking_crops or []))


def quality_match(buyer: Any, listing: Any) -> bool:
    grade = _text(listing.quality_grade).lower()
    for standard in buyer.quality_standards or []:
        s = standard.lower()
        if s in grade or grade in s:
            return True
    return False


def volume_points(buyer: Any, listing: Any) -> int:
    if not buyer.volume_required:
        return NO_VOLUME_REQUIREMENT_POINTS

    parsed = parse_volume(buyer.volume_required)
    if not parsed:
        return 0

    amount, unit = parsed
    listing_unit = listing.unit or "tons"
    if not (unit == listing_unit or (unit == "ton" and listing_unit == "tons")):
        return 0
    if amount <= 0:
        return 0

    ratio = listing.quantity / amount
    for low, high, points in VOLUME_BANDS:
        if low <= ratio <= high:
            return points
    return 0


def availability_points(listing: Any, now: Optional[datetime] = None) -> int:
    available_from = getattr(listing, "available_from", None)
    if available_from is None:
        return 0

    now = _naive_utc(now or datetime.utcnow())
    available_from = _naive_utc(available_from)
    if available_from <= now:
        return AVAILABLE_NOW_POINTS

    days = (available_from - now).total_seconds() / 86400
    for max_days, points in AVAILABILITY_BANDS:
        if days <= max_days:
            return points
    return 0


# ----------------------------------------------------------
# SCORING
# ----------------------------------------------------------

def calculate_compatibility_score(
    buyer: Any,
    listing: Any,
    now: Optional[datetime] = None,
    home_country: Optional[str] = None,
) -> float:
    score = 0

    if not seller_verified(listing):
        if is_international(buyer, home_country):
            return 0
        score -= UNVERIFIED_PENALTY
    else:
        score += VERIFIED_BONUS

    if exact_crop_match(buyer, listing):
        score += EXACT_CROP_POINTS
    elif partial_crop_match(buyer, listing):
        score += PARTIAL_CROP_POINTS

    if quality_match(buyer, listing):
        score += QUALITY_POINTS
    elif (
        any("premium" in s.lower() for s in (buyer.quality_standards or []))
        and _text(listing.quality_grade) == "PREMIUM"
    ):
        score += PREMIUM_FALLBACK_POINTS

    score += volume_points(buyer, listing)

    # presence only; no market-price comparison yet
    if (listing.price_per_unit or 0) > 0:
        score += PRICE_POINTS

    score += availability_points(listing, now)

    return max(0, min(score, MAX_SCORE))


def fallback_reasons(buyer: Any, listing: Any, score: float) -> List[str]:
    reasons = []

    if exact_crop_match(buyer, listing):
        reasons.append(f"Crop type matches buyer requirements: {_text(listing.crop_type)}")

    if quality_match(buyer, listing):
        reasons.append(f"Quality grade ({_text(listing.quality_grade)}) meets buyer standards")

    if listing.quantity >= 10:
        reasons.append(f"Large quantity available: {format_quantity(listing.quantity)} {listing.unit}")

    if listing.certifications:
        reasons.append(f"Certifications: {', '.join(listing.certifications)}")

    if score >= 70:
        reasons.append("High compatibility score - excellent match")
    elif score >= 50:
        reasons.append("Good compatibility score - strong match")

    return reasons or ["Compatible listing based on basic criteria"]


async def find_matches(
    buyer: Any,
    listings: Iterable[Any],
    limit: int = 10,
    ai_client: Any = None,
    now: Optional[datetime] = None,
    home_country: Optional[str] = None,
) -> List[MatchResult]:
    """Score every listing, keep those above MIN_MATCH_SCORE, best first."""
    matches: List[MatchResult] = []

    for listing in listings:
        score = calculate_compatibility_score(buyer, listing, now=now, home_country=home_country)
        if score <= MIN_MATCH_SCORE:
            continue

        reasons = []
        if ai_client is not None:
            reasons = await ai_client.generate_match_recommendation(buyer, listing, score)
        if not reasons:
            reasons = fallback_reasons(buyer, listing, score)

        matches.append(
            MatchResult(
                listing_id=listing.id,
                farmer_id=listing.farmer_id,
                score=round(score, 2),
                estimated_value=listing.quantity * listing.price_per_unit,
                reasons=reasons,
            )
        )

    matches.sort(key=lambda m: m.score, reverse=True)
    logger.info(f"Scored listings for buyer {getattr(buyer, 'id', None)}: {len(matches)} above threshold")
    return matches[:limit]

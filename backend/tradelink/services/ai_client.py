# backend/tradelink/services/ai_client.py

"""
Match explanations from a chat-completions endpoint.

Disabled (returns []) when OPENAI_API_KEY is unset. Any HTTP or payload
error is logged and yields [] so callers fall back to rule-based reasons.
"""

import re
from functools import lru_cache
from typing import Any, List, Optional

import httpx

from tradelink.core.config import settings
from tradelink.core.logger import get_logger
from tradelink.services.matching_service import format_quantity

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are an expert agricultural commodity trading advisor specializing in "
    "West African markets. Provide concise, actionable insights."
)

MAX_REASONS = 5
_NUMBERED_LINE = re.compile(r"^\d+[.)]")


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(getattr(value, "value", value))


def build_match_prompt(buyer: Any, listing: Any, score: float) -> str:
    available = listing.available_from.date().isoformat() if listing.available_from else "N/A"
    farmer = getattr(listing, "farmer", None)
    country = getattr(buyer, "country_name", None) or getattr(buyer, "country", None) or "N/A"
    region = getattr(farmer, "region", None) or "N/A"
    district = getattr(farmer, "district", None) or "N/A"
    return (
        "Analyze this agricultural commodity match and provide 3-5 concise reasons "
        "why this is a good match:\n\n"
        "Buyer Profile:\n"
        f"- Company: {buyer.company_name}\n"
        f"- Seeking: {', '.join(buyer.seeking_crops or [])}\n"
        f"- Volume Required: {buyer.volume_required or 'Not specified'}\n"
        f"- Quality Standards: {', '.join(buyer.quality_standards or [])}\n"
        f"- Country: {country}\n\n"
        "Farmer Listing:\n"
        f"- Crop: {_text(listing.crop_type)} ({listing.crop_variety or 'N/A'})\n"
        f"- Quantity: {format_quantity(listing.quantity)} {listing.unit}\n"
        f"- Quality: {_text(listing.quality_grade)}\n"
        f"- Price: ${listing.price_per_unit}/{listing.unit}\n"
        f"- Location: {region}, {district}\n"
        f"- Available: {available}\n"
        f"- Certifications: {', '.join(listing.certifications or []) or 'None'}\n\n"
        f"Compatibility Score: {score}/100\n\n"
        "Provide your analysis as a bullet-point list of key matching factors."
    )


def parse_recommendation(content: Optional[str]) -> List[str]:
    """Non-empty lines, numbered headings dropped, first MAX_REASONS kept."""
    if not content:
        return []
    lines = [line.strip() for line in content.split("\n")]
    reasons = [line for line in lines if line and not _NUMBERED_LINE.match(line)]
    return reasons[:MAX_REASONS]


class AiClient:
    def __init__(
        self,
        api_key: Optional[str] = None,
        model: str = settings.OPENAI_MODEL,
        api_url: str = settings.OPENAI_API_URL,
        max_tokens: int = settings.AI_MAX_TOKENS,
        temperature: float = settings.AI_TEMPERATURE,
        timeout: float = settings.AI_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.model = model
        self.api_url = api_url
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.timeout = timeout
        self.transport = transport

        if not self.enabled:
            logger.warning("OPENAI_API_KEY not set; match reasons will be rule-based")

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def generate_match_recommendation(self, buyer: Any, listing: Any, score: float) -> List[str]:
        if not self.enabled:
            return []

        try:
            content = await self._complete(build_match_prompt(buyer, listing, score))
        except (httpx.HTTPError, KeyError, IndexError, TypeError, ValueError) as exc:
            logger.error(f"AI recommendation failed for listing {getattr(listing, 'id', None)}: {exc}")
            return []

        return parse_recommendation(content)

    async def _complete(self, prompt: str) -> str:
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            resp = await client.post(
                self.api_url,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": SYSTEM_PROMPT},
                        {"role": "user", "content": prompt},
                    ],
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
            )
            resp.raise_for_status()
            data = resp.json()

        return data["choices"][0]["message"]["content"] or ""


@lru_cache
def get_ai_client() -> AiClient:
    """FastAPI dependency; tests override it with a client on a MockTransport."""
    return AiClient(api_key=settings.OPENAI_API_KEY)

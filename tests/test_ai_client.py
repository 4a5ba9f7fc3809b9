import json
from datetime import datetime
from types import SimpleNamespace

import httpx

from tradelink.services.ai_client import SYSTEM_PROMPT, AiClient, build_match_prompt, parse_recommendation

BUYER = SimpleNamespace(
    company_name="Hamburg Chocolate GmbH",
    seeking_crops=["Cocoa"],
    volume_required="10 tons/month",
    quality_standards=["PREMIUM"],
)
LISTING = SimpleNamespace(
    id="listing-1",
    crop_type="Cocoa",
    crop_variety="Amelonado",
    quantity=12,
    unit="tons",
    quality_grade="PREMIUM",
    price_per_unit=2500,
    available_from=datetime(2026, 3, 1),
    certifications=["Organic"],
)


def completion(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_parse_recommendation_drops_numbered_headings_and_blanks():
    content = "1. Overview\n\n- Exact crop match\n  - Premium grade  \n2) Logistics\n- Ships from Tema\n"
    assert parse_recommendation(content) == ["- Exact crop match", "- Premium grade", "- Ships from Tema"]


def test_parse_recommendation_keeps_first_five():
    content = "\n".join(f"- reason {i}" for i in range(8))
    assert len(parse_recommendation(content)) == 5
    assert parse_recommendation(None) == []


def test_prompt_contains_buyer_and_listing_details():
    prompt = build_match_prompt(BUYER, LISTING, 92.5)
    assert "Hamburg Chocolate GmbH" in prompt
    assert "Cocoa (Amelonado)" in prompt
    assert "Quantity: 12 tons" in prompt
    assert "Compatibility Score: 92.5/100" in prompt


def test_prompt_includes_buyer_country_and_farm_location():
    buyer = SimpleNamespace(**{**vars(BUYER), "country": "DE", "country_name": "Germany"})
    listing = SimpleNamespace(
        **{**vars(LISTING), "quantity": 1500000, "farmer": SimpleNamespace(region="Ashanti", district="Kumasi Metro")}
    )

    prompt = build_match_prompt(buyer, listing, 80)

    assert "- Country: Germany" in prompt
    assert "- Location: Ashanti, Kumasi Metro" in prompt
    assert "Quantity: 1500000 tons" in prompt


def test_prompt_without_farmer_or_country():
    prompt = build_match_prompt(BUYER, LISTING, 80)
    assert "- Country: N/A" in prompt
    assert "- Location: N/A, N/A" in prompt


async def test_disabled_without_api_key():
    client = AiClient(api_key=None)
    assert not client.enabled
    assert await client.generate_match_recommendation(BUYER, LISTING, 90) == []


async def test_generates_reasons_from_completion():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=completion("- Exact crop match\n- Verified farmer"))

    client = AiClient(api_key="sk-test", model="gpt-test", transport=httpx.MockTransport(handler))
    reasons = await client.generate_match_recommendation(BUYER, LISTING, 90)

    assert reasons == ["- Exact crop match", "- Verified farmer"]
    assert seen["auth"] == "Bearer sk-test"
    assert seen["body"]["model"] == "gpt-test"
    assert seen["body"]["max_tokens"] == 500
    assert seen["body"]["temperature"] == 0.7
    assert seen["body"]["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}


async def test_http_error_yields_no_reasons():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"error": "boom"}))
    client = AiClient(api_key="sk-test", transport=transport)
    assert await client.generate_match_recommendation(BUYER, LISTING, 90) == []


async def test_malformed_payload_yields_no_reasons():
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"choices": []}))
    client = AiClient(api_key="sk-test", transport=transport)
    assert await client.generate_match_recommendation(BUYER, LISTING, 90) == []


async def test_transport_failure_yields_no_reasons():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    client = AiClient(api_key="sk-test", transport=httpx.MockTransport(handler))
    assert await client.generate_match_recommendation(BUYER, LISTING, 90) == []

import os

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ["OPENAI_API_KEY"] = ""

from datetime import datetime, timedelta
from types import SimpleNamespace

import jwt
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.pool import StaticPool

from tradelink.core.config import settings
from tradelink.core.database import build_engine, create_tables, get_db, make_session_factory
from tradelink.main import app
from tradelink.models import Buyer, Farmer, Listing, Match, User
from tradelink.models.enums import ListingStatus, MatchStatus, QualityGrade, UserRole
from tradelink.services.ai_client import AiClient, get_ai_client


# ------------------------------------------------
# DATABASE
# ------------------------------------------------
@pytest.fixture
async def session_factory():
    engine = build_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    await create_tables(engine)

    yield make_session_factory(engine)

    await engine.dispose()


@pytest.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_ai_client] = lambda: AiClient(api_key=None)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


def make_token(user_id: str, role: str, expires_in: int = 3600) -> str:
    payload = {
        "sub": user_id,
        "role": role,
        "email": f"{user_id}@example.com",
        "exp": datetime.utcnow() + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def auth(user) -> dict:
    role = user.role.value if hasattr(user.role, "value") else user.role
    return {"Authorization": f"Bearer {make_token(user.id, role)}"}


# ------------------------------------------------
# SEED DATA
# ------------------------------------------------
async def add_user(db, email: str, role: UserRole, verified: bool = True) -> User:
    user = User(email=email, role=role, first_name="Ama", last_name="Mensah", verified=verified)
    db.add(user)
    await db.commit()
    return user


@pytest.fixture
async def marketplace(db):
    """A verified farmer with one Cocoa listing, a domestic buyer and an admin."""
    farmer_user = await add_user(db, "farmer@example.com", UserRole.FARMER, verified=True)
    buyer_user = await add_user(db, "buyer@example.com", UserRole.BUYER)
    admin_user = await add_user(db, "admin@example.com", UserRole.ADMIN)

    farmer = Farmer(
        user_id=farmer_user.id,
        location="Kumasi",
        district="Kumasi Metro",
        region="Ashanti",
        certifications=["Organic"],
    )
    buyer = Buyer(
        user_id=buyer_user.id,
        company_name="Accra Cocoa Processors",
        country="GH",
        industry="Food Processing",
        seeking_crops=["Cocoa"],
        volume_required="10 tons/month",
        quality_standards=["PREMIUM"],
    )
    db.add_all([farmer, buyer])
    await db.commit()

    listing = Listing(
        farmer_id=farmer.id,
        crop_type="Cocoa",
        quantity=12,
        unit="tons",
        quality_grade=QualityGrade.PREMIUM,
        price_per_unit=2500,
        available_from=datetime.utcnow() - timedelta(days=1),
        certifications=["Organic"],
        status=ListingStatus.ACTIVE,
    )
    db.add(listing)
    await db.commit()

    return SimpleNamespace(
        farmer_user=farmer_user,
        buyer_user=buyer_user,
        admin_user=admin_user,
        farmer=farmer,
        buyer=buyer,
        listing=listing,
    )


@pytest.fixture
async def match(db, marketplace):
    m = Match(
        listing_id=marketplace.listing.id,
        farmer_id=marketplace.farmer.id,
        buyer_id=marketplace.buyer.id,
        compatibility_score=85,
        estimated_value=30000,
        status=MatchStatus.CONTACTED,
    )
    db.add(m)
    await db.commit()
    return m

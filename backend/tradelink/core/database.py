from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from .config import settings

Base = declarative_base()


def build_engine(url: str, echo: bool = False, **options) -> AsyncEngine:
    """sqlite+aiosqlite for dev and tests, postgresql+asyncpg in production."""
    if url.startswith("sqlite"):
        options.setdefault("connect_args", {"check_same_thread": False})
    else:
        options.setdefault("pool_pre_ping", True)
    return create_async_engine(url, echo=echo, future=True, **options)


def make_session_factory(bind: AsyncEngine) -> sessionmaker:
    # relationships are read after commit when building responses
    return sessionmaker(bind=bind, expire_on_commit=False, class_=AsyncSession)


if not settings.DATABASE_URL:
    raise RuntimeError("DATABASE_URL must be set in environment")

engine = build_engine(settings.DATABASE_URL, echo=settings.DB_ECHO)
AsyncSessionLocal = make_session_factory(engine)


# Dependency for FastAPI
async def get_db():
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def check_database(db: AsyncSession) -> str:
    await db.execute(text("SELECT 1"))
    return db.get_bind().dialect.name


async def create_tables(bind: AsyncEngine = None):
    # registers every model on Base.metadata
    from tradelink import models  # noqa: F401

    async with (bind or engine).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

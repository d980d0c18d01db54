# tarot_api/data/database.py
import logging

from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from tarot_api.core.config import get_async_database_url, settings

logger = logging.getLogger(__name__)

async_database_url = get_async_database_url(settings.DATABASE_URL)
if async_database_url != settings.DATABASE_URL:
    logger.warning(f"Adapted database URL to: {async_database_url}. Please update your configuration.")


engine = create_async_engine(async_database_url, echo=settings.DEBUG)

AsyncSessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=engine, class_=AsyncSession, expire_on_commit=False
)

Base = declarative_base()


async def get_db():
    db = AsyncSessionLocal()
    try:
        yield db
    finally:
        await db.close()


async def create_tables(bind=engine):
    # Import models so they register on Base.metadata
    from tarot_api.models.database_models import card, drawn_card, reading, reading_stats, user  # noqa: F401

    async with bind.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

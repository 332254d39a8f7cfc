import asyncio
import logging

from src.database import engine, Base

# Import all models to ensure they are registered in Base.metadata
from src.projects.models import Project, InterviewAnswer, InterviewQuestion
from src.drafting.models import DraftSection
from src.quality.models import QualityIssue
from src.usage.models import TokenUsage

logger = logging.getLogger(__name__)


async def init_models():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created.")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    asyncio.run(init_models())

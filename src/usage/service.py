import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.config import settings
from src.llm.client import TokenUsageData
from src.usage.models import TokenUsage
from src.usage.schemas import RateLimitResult, TodayUsage, AllTimeUsage, UsageSummary

logger = logging.getLogger(__name__)

WINDOW = timedelta(days=1)
ANONYMOUS_OWNER = "anonymous"


class UsageService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def log_usage(
        self,
        owner_id: Optional[str],
        operation: str,
        usage: TokenUsageData,
        project_id: Optional[UUID] = None,
    ) -> None:
        """Persist one LLM call's token usage. Never raises."""
        try:
            self.db.add(TokenUsage(
                owner_id=owner_id or ANONYMOUS_OWNER,
                project_id=project_id,
                operation=operation,
                model=usage.model,
                prompt_tokens=usage.prompt_tokens,
                completion_tokens=usage.completion_tokens,
                total_tokens=usage.total_tokens,
            ))
            await self.db.commit()
        except Exception:
            logger.exception("Failed to log token usage for %s", operation)
            try:
                await self.db.rollback()
            except Exception:
                logger.exception("Rollback after usage logging failure also failed")

    async def _tokens_since(self, owner_id: str, since: Optional[datetime]) -> int:
        stmt = select(func.sum(TokenUsage.total_tokens)).where(TokenUsage.owner_id == owner_id)
        if since is not None:
            stmt = stmt.where(TokenUsage.created_at >= since)
        result = await self.db.execute(stmt)
        return result.scalar() or 0

    async def check_rate_limit(self, owner_id: Optional[str]) -> RateLimitResult:
        """Rolling 24h token budget check."""
        since = datetime.utcnow() - WINDOW
        limit = settings.FREE_TIER_TOKENS_PER_DAY
        used = await self._tokens_since(owner_id or ANONYMOUS_OWNER, since)
        return RateLimitResult(
            allowed=used < limit,
            used=used,
            remaining=max(0, limit - used),
            reset_at=since + WINDOW,
        )

    async def summary(self, owner_id: str) -> UsageSummary:
        since = datetime.utcnow() - WINDOW
        limit = settings.FREE_TIER_TOKENS_PER_DAY
        today_tokens = await self._tokens_since(owner_id, since)
        all_time_tokens = await self._tokens_since(owner_id, None)

        result = await self.db.execute(
            select(TokenUsage.operation, func.sum(TokenUsage.total_tokens))
            .where(TokenUsage.owner_id == owner_id)
            .group_by(TokenUsage.operation)
        )
        operations = {op: total or 0 for op, total in result.all()}

        return UsageSummary(
            today=TodayUsage(
                tokens=today_tokens,
                limit=limit,
                remaining=max(0, limit - today_tokens),
                reset_at=since + WINDOW,
            ),
            all_time=AllTimeUsage(tokens=all_time_tokens, operations=operations),
        )

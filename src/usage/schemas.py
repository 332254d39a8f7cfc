from datetime import datetime
from typing import Dict
from pydantic import BaseModel


class RateLimitResult(BaseModel):
    allowed: bool
    used: int
    remaining: int
    reset_at: datetime


class TodayUsage(BaseModel):
    tokens: int
    limit: int
    remaining: int
    reset_at: datetime


class AllTimeUsage(BaseModel):
    tokens: int
    operations: Dict[str, int]


class UsageSummary(BaseModel):
    today: TodayUsage
    all_time: AllTimeUsage

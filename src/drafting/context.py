"""Invention context construction.

The context is the only thing the drafting prompts know about the invention.
It is built once per generation request and never persisted.

Two interview modes feed it:

* static — the fixed questionnaire, a flat ``question_key -> answer`` map
  serialised as ordered JSON;
* dynamic — AI-generated questions, rendered as ``Q:``/``A:`` pairs grouped by
  category.

The two pure builders are wrapped by :class:`ContextSource` strategies that
load the rows for a project, so the generation pipeline does not care which
interview the user took.
"""

import json
from typing import List, Mapping, Optional, Protocol, Sequence
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.drafting.exceptions import NoAnswersError, NoQuestionsError
from src.interview.questions import QUESTION_KEYS
from src.projects.models import InterviewAnswer, InterviewQuestion

UNTITLED = "Untitled Invention"
NOT_ANSWERED = "(not answered)"
CATEGORY_SEPARATOR = "\n\n---\n\n"


class QAPair(BaseModel):
    category: str
    question: str
    answer: Optional[str] = None


def build_invention_context(answers: Mapping[str, str]) -> str:
    ctx = {}
    for key in QUESTION_KEYS:
        ctx[key] = (answers.get(key) or "").strip()
    ctx["invention_title"] = ctx["invention_title"] or UNTITLED
    return json.dumps(ctx, indent=2, ensure_ascii=False)


def build_dynamic_context(pairs: Sequence[QAPair]) -> str:
    grouped: dict[str, List[QAPair]] = {}
    for pair in pairs:
        grouped.setdefault(pair.category, []).append(pair)

    blocks = []
    for category, items in grouped.items():
        lines = [f"## {category}"]
        for item in items:
            answer = (item.answer or "").strip() or NOT_ANSWERED
            lines.append(f"Q: {item.question}\nA: {answer}")
        blocks.append("\n\n".join(lines))
    return CATEGORY_SEPARATOR.join(blocks)


# ---------------------------------------------------------------------------
# Context sources
# ---------------------------------------------------------------------------

class ContextSource(Protocol):
    name: str

    async def build(self, project_id: UUID) -> str:
        ...


class StaticInterviewSource:
    name = "static"

    def __init__(self, db: AsyncSession):
        self.db = db

    async def build(self, project_id: UUID) -> str:
        result = await self.db.execute(
            select(InterviewAnswer).where(InterviewAnswer.project_id == project_id)
        )
        rows = result.scalars().all()
        if not rows:
            raise NoAnswersError()
        return build_invention_context({r.question_key: r.answer for r in rows})


class DynamicInterviewSource:
    name = "dynamic"

    def __init__(self, db: AsyncSession):
        self.db = db

    async def build(self, project_id: UUID) -> str:
        result = await self.db.execute(
            select(InterviewQuestion)
            .where(InterviewQuestion.project_id == project_id)
            .order_by(InterviewQuestion.order)
        )
        rows = result.scalars().all()
        if not rows:
            raise NoQuestionsError()
        return build_dynamic_context([
            QAPair(category=q.category, question=q.prompt, answer=q.answer)
            for q in rows
        ])

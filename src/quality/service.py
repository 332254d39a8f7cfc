import logging
from typing import List, Mapping, Optional
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.agents.quality.prompts import QUALITY_SYSTEM_PROMPT, build_quality_check_prompt
from src.drafting.exceptions import NoDraftError, ProjectNotFoundError
from src.drafting.models import SECTION_LABELS, SECTION_ORDER
from src.drafting.store import DraftStore
from src.llm import generate_text, get_quality_llm
from src.llm.json_utils import extract_json
from src.quality.heuristics import run_heuristic_checks
from src.quality.merge import merge_issues
from src.quality.models import QualityIssue
from src.quality.schemas import QualityIssueData
from src.usage.service import UsageService

logger = logging.getLogger(__name__)


def build_draft_text(sections: Mapping[str, str]) -> str:
    """Concatenate non-empty sections in canonical order under their labels."""
    parts = []
    for key in SECTION_ORDER:
        content = sections.get(key.value)
        if content:
            parts.append(f"## {SECTION_LABELS[key]}\n{content}")
    return "\n\n".join(parts)


def parse_ai_issues(raw: str) -> List[QualityIssueData]:
    """Parse the checker's ``{"issues": [...]}`` reply, skipping entries that don't validate."""
    data = extract_json(raw, "quality check")
    items = data.get("issues", []) if isinstance(data, dict) else []
    issues = []
    for item in items:
        try:
            issue = QualityIssueData.model_validate(item)
        except ValidationError:
            logger.warning("Skipping malformed AI quality issue: %s", item)
            continue
        issue.metadata.setdefault("location", "")
        issues.append(issue)
    return issues


class QualityService:
    def __init__(
        self,
        db: AsyncSession,
        store: Optional[DraftStore] = None,
        usage: Optional[UsageService] = None,
    ):
        self.db = db
        self.store = store or DraftStore(db)
        self.usage = usage or UsageService(db)

    async def _ai_issues(self, project_id: UUID, owner_id: Optional[str], draft_text: str) -> List[QualityIssueData]:
        # Best-effort: the heuristic results stand on their own
        try:
            result = await generate_text(
                get_quality_llm(), QUALITY_SYSTEM_PROMPT, build_quality_check_prompt(draft_text)
            )
        except Exception as e:
            logger.warning(f"AI quality check failed for project {project_id}: {e}")
            return []

        await self.usage.log_usage(owner_id, "QUALITY_CHECK", result.usage, project_id=project_id)

        try:
            return parse_ai_issues(result.content)
        except Exception as e:
            logger.warning(f"AI quality check returned unusable output for project {project_id}: {e}")
            return []

    async def run_quality_check(self, project_id: UUID) -> List[QualityIssueData]:
        """
        Run AI and heuristic checks over the current draft and replace the
        project's persisted issues with the merged result.

        Two concurrent runs on the same project may interleave their
        delete/insert; the last commit wins.
        """
        project = await self.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        sections = await self.store.sections_map(project_id)
        if not sections:
            raise NoDraftError()

        ai_issues = await self._ai_issues(project_id, project.owner_id, build_draft_text(sections))
        heuristic_issues = run_heuristic_checks(sections)
        merged = merge_issues(ai_issues, heuristic_issues)

        try:
            await self.db.execute(delete(QualityIssue).where(QualityIssue.project_id == project_id))
            for position, issue in enumerate(merged):
                self.db.add(QualityIssue(
                    project_id=project_id,
                    position=position,
                    type=issue.type,
                    severity=issue.severity,
                    message=issue.message,
                    issue_metadata=issue.metadata,
                ))
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            "Quality check for project %s: %d AI + %d heuristic -> %d issues",
            project_id, len(ai_issues), len(heuristic_issues), len(merged),
        )
        return merged

    async def list_issues(self, project_id: UUID) -> List[QualityIssue]:
        result = await self.db.execute(
            select(QualityIssue)
            .where(QualityIssue.project_id == project_id)
            .order_by(QualityIssue.position)
        )
        return list(result.scalars().all())

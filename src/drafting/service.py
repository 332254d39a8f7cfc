import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.agents.drafting.agent import drafting_agent, DraftingAgentState
from src.agents.drafting.prompts import DEFAULT_SYSTEM_PROMPT
from src.drafting.context import ContextSource, DynamicInterviewSource, StaticInterviewSource
from src.drafting.exceptions import ProjectNotFoundError
from src.drafting.models import DRAFT_SECTION_KEYS, SECTION_ORDER, DraftSection, SectionKey
from src.drafting.schemas import DraftResult, WrittenSection
from src.drafting.store import DraftStore
from src.llm.client import TokenUsageData
from src.projects.models import InterviewQuestion
from src.usage.service import UsageService

logger = logging.getLogger(__name__)


def sort_sections(sections: List[DraftSection]) -> List[DraftSection]:
    """Order persisted sections canonically for display and export."""
    rank = {key: i for i, key in enumerate(SECTION_ORDER)}
    return sorted(sections, key=lambda s: rank.get(s.section_key, len(rank)))


class DraftingService:
    def __init__(
        self,
        db: AsyncSession,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        store: Optional[DraftStore] = None,
        usage: Optional[UsageService] = None,
    ):
        self.db = db
        self.system_prompt = system_prompt
        self.store = store or DraftStore(db)
        self.usage = usage or UsageService(db)

    async def generate_draft(self, project_id: UUID, source: ContextSource) -> DraftResult:
        """
        Produce the complete draft (six sections, then claims) for a project and
        mark its interview completed.

        Nothing is written unless both LLM calls succeed; the completion flag is
        set in the same transaction as the section upsert.
        """
        project = await self.store.get_project(project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        owner_id = project.owner_id

        # 1. Context from the chosen interview
        context = await source.build(project_id)

        async def on_usage(operation: str, usage: TokenUsageData) -> None:
            await self.usage.log_usage(owner_id, operation, usage, project_id=project_id)

        # 2. Sections, then claims
        initial_state: DraftingAgentState = {
            "context": context,
            "system_prompt": self.system_prompt,
            "sections": None,
            "claims": None,
        }
        final_state = await drafting_agent.ainvoke(
            initial_state, config={"configurable": {"on_usage": on_usage}}
        )

        sections = final_state["sections"]
        written = [(key, sections.get(key, "")) for key in DRAFT_SECTION_KEYS]
        written.append((SectionKey.CLAIMS, final_state["claims"]))

        # 3. Persist all seven records, then flip the completion flag
        try:
            await self.store.upsert_sections(project_id, written)
            await self.store.mark_interview_completed(project_id)
            await self.store.commit()
        except Exception:
            await self.store.rollback()
            raise

        logger.info(
            "Generated %s draft for project %s (%d sections)", source.name, project_id, len(written)
        )
        return DraftResult(
            success=True,
            pipeline=source.name,
            sections=[WrittenSection(section_key=k, content=c) for k, c in written],
        )

    async def generate_all_draft(self, project_id: UUID) -> DraftResult:
        return await self.generate_draft(project_id, StaticInterviewSource(self.db))

    async def generate_all_draft_from_dynamic(self, project_id: UUID) -> DraftResult:
        return await self.generate_draft(project_id, DynamicInterviewSource(self.db))

    async def has_dynamic_interview(self, project_id: UUID) -> bool:
        result = await self.db.execute(
            select(func.count()).select_from(InterviewQuestion).where(
                InterviewQuestion.project_id == project_id
            )
        )
        return (result.scalar() or 0) > 0

    async def generate(self, project_id: UUID) -> DraftResult:
        """Pick the dynamic pipeline when AI questions exist, the static one otherwise."""
        if await self.has_dynamic_interview(project_id):
            return await self.generate_all_draft_from_dynamic(project_id)
        return await self.generate_all_draft(project_id)

    async def list_sections(self, project_id: UUID) -> List[DraftSection]:
        return sort_sections(await self.store.list_sections(project_id))

    async def update_section(self, project_id: UUID, section_key: SectionKey, content: str) -> DraftSection:
        await self.store.upsert_sections(project_id, [(section_key, content)])
        await self.store.commit()
        result = await self.db.execute(
            select(DraftSection).where(
                DraftSection.project_id == project_id,
                DraftSection.section_key == section_key,
            ).execution_options(populate_existing=True)
        )
        return result.scalar_one()

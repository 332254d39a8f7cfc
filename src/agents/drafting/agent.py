"""Draft writer — two-stage pipeline.

Graph topology::

    START → draft_sections → draft_claims → END

The two LLM calls are strictly sequential: concurrent requests trip provider
rate limits, and usage records must stay in call order. Node exceptions are not
caught here; they propagate out of ``ainvoke`` and abort the whole draft.
"""

import logging
from typing import Any, Dict, Optional, TypedDict

from langchain_core.runnables import RunnableConfig
from langgraph.graph import StateGraph, END

from src.agents.base import report_usage
from src.agents.drafting.prompts import build_claims_prompt, build_draft_sections_prompt
from src.drafting.exceptions import MalformedSectionsError
from src.drafting.models import DRAFT_SECTION_KEYS, SectionKey
from src.llm.client import generate_text
from src.llm.factory import get_claims_llm, get_drafting_llm
from src.llm.json_utils import JSONExtractionError, extract_json

logger = logging.getLogger(__name__)

OPERATION_DRAFT_SECTIONS = "DRAFT_SECTIONS"
OPERATION_CLAIMS = "CLAIMS"


class DraftingAgentState(TypedDict):
    context: str
    system_prompt: str
    sections: Optional[Dict[SectionKey, str]]
    claims: Optional[str]


def parse_sections_response(raw: str) -> Dict[SectionKey, str]:
    """Map the sections JSON onto the six section keys; missing keys become ``""``."""
    try:
        parsed = extract_json(raw, label="draft sections")
    except JSONExtractionError:
        raise MalformedSectionsError(raw)
    if not isinstance(parsed, dict):
        raise MalformedSectionsError(raw)

    sections = parsed.get("sections")
    if not isinstance(sections, dict):
        sections = {}

    result: Dict[SectionKey, str] = {}
    for key in DRAFT_SECTION_KEYS:
        value = sections.get(key.value)
        result[key] = value.strip() if isinstance(value, str) else ""
    return result


async def draft_sections_node(state: DraftingAgentState, config: RunnableConfig) -> Dict[str, Any]:
    result = await generate_text(
        get_drafting_llm(),
        system=state["system_prompt"],
        prompt=build_draft_sections_prompt(state["context"]),
    )
    await report_usage(config, OPERATION_DRAFT_SECTIONS, result.usage)
    sections = parse_sections_response(result.content)
    logger.info("Drafted %d specification sections", sum(1 for v in sections.values() if v))
    return {"sections": sections}


async def draft_claims_node(state: DraftingAgentState, config: RunnableConfig) -> Dict[str, Any]:
    result = await generate_text(
        get_claims_llm(),
        system=state["system_prompt"],
        prompt=build_claims_prompt(state["context"]),
    )
    await report_usage(config, OPERATION_CLAIMS, result.usage)
    return {"claims": result.content.strip()}


def create_drafting_agent():
    workflow = StateGraph(DraftingAgentState)
    workflow.add_node("draft_sections", draft_sections_node)
    workflow.add_node("draft_claims", draft_claims_node)
    workflow.set_entry_point("draft_sections")
    workflow.add_edge("draft_sections", "draft_claims")
    workflow.add_edge("draft_claims", END)

    return workflow.compile()


# Singleton instance accessor
drafting_agent = create_drafting_agent()

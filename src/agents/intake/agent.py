"""Intake — turns free-form inventor notes into a tailored interview.

Graph topology::

    START → extract → generate_questions → END

``extract`` structures the notes into the ten extraction fields; the
question generator reads that structure plus the (truncated) original notes.
"""

import json
import logging
from typing import Any, Dict, List, Optional, TypedDict

from langchain_core.runnables import RunnableConfig
from langgraph.graph import StateGraph, END
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.agents.base import configurable, report_usage
from src.agents.intake.prompts import (
    EXTRACTION_SYSTEM_PROMPT,
    QUESTION_GENERATION_SYSTEM_PROMPT,
    build_extraction_prompt,
    build_question_generation_prompt,
)
from src.drafting.exceptions import MalformedExtractionError, MalformedQuestionsError
from src.llm.client import generate_text
from src.llm.factory import get_intake_llm
from src.llm.json_utils import JSONExtractionError, extract_json
from src.projects.models import AnswerType

logger = logging.getLogger(__name__)

OPERATION_EXTRACTION = "INTAKE_EXTRACTION"
OPERATION_QUESTIONS = "QUESTION_GENERATION"


class GeneratedQuestion(BaseModel):
    order: int
    category: str = "General"
    prompt: str = Field(min_length=1)
    help_text: Optional[str] = Field(default=None, alias="helpText")
    answer_type: AnswerType = Field(default=AnswerType.LONGTEXT, alias="answerType")
    required: bool = False

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("answer_type", mode="before")
    @classmethod
    def _unknown_type_is_longtext(cls, v):
        return v if v in AnswerType.__members__ else AnswerType.LONGTEXT


class IntakeAgentState(TypedDict):
    notes: str
    pdf_text: Optional[str]
    transcript: Optional[str]
    extracted: Optional[Dict[str, Any]]
    questions: Optional[List[GeneratedQuestion]]


def parse_extraction_response(raw: str) -> Dict[str, Any]:
    try:
        parsed = extract_json(raw, label="invention extraction")
    except JSONExtractionError:
        raise MalformedExtractionError(raw)
    if not isinstance(parsed, dict):
        raise MalformedExtractionError(raw)
    return parsed


def parse_questions_response(raw: str) -> List[GeneratedQuestion]:
    """Validate the question array, sorted by the model's order and renumbered 1..n."""
    try:
        parsed = extract_json(raw, label="interview questions")
    except JSONExtractionError:
        raise MalformedQuestionsError(raw)
    if not isinstance(parsed, list) or not parsed:
        raise MalformedQuestionsError(raw)

    questions = []
    for item in parsed:
        if not isinstance(item, dict):
            continue
        try:
            question = GeneratedQuestion.model_validate({"order": len(questions) + 1, **item})
        except ValidationError:
            logger.warning("Skipping malformed generated question: %s", item)
            continue
        questions.append(question)

    if not questions:
        raise MalformedQuestionsError(raw)
    questions.sort(key=lambda q: q.order)
    for i, question in enumerate(questions, start=1):
        question.order = i
    return questions


async def extract_node(state: IntakeAgentState, config: RunnableConfig) -> Dict[str, Any]:
    result = await generate_text(
        get_intake_llm(),
        system=EXTRACTION_SYSTEM_PROMPT,
        prompt=build_extraction_prompt(state["notes"], state.get("pdf_text"), state.get("transcript")),
    )
    await report_usage(config, OPERATION_EXTRACTION, result.usage)
    extracted = parse_extraction_response(result.content)

    # Saved before question generation runs
    on_extracted = configurable(config).get("on_extracted")
    if on_extracted is not None:
        await on_extracted(extracted)
    return {"extracted": extracted}


async def generate_questions_node(state: IntakeAgentState, config: RunnableConfig) -> Dict[str, Any]:
    result = await generate_text(
        get_intake_llm(),
        system=QUESTION_GENERATION_SYSTEM_PROMPT,
        prompt=build_question_generation_prompt(
            json.dumps(state["extracted"], indent=2, ensure_ascii=False), state["notes"]
        ),
    )
    await report_usage(config, OPERATION_QUESTIONS, result.usage)
    questions = parse_questions_response(result.content)
    logger.info("Generated %d interview questions", len(questions))
    return {"questions": questions}


def create_intake_agent():
    workflow = StateGraph(IntakeAgentState)
    workflow.add_node("extract", extract_node)
    workflow.add_node("generate_questions", generate_questions_node)
    workflow.set_entry_point("extract")
    workflow.add_edge("extract", "generate_questions")
    workflow.add_edge("generate_questions", END)

    return workflow.compile()


intake_agent = create_intake_agent()

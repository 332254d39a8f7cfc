import json
import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from langchain_core.language_models import FakeListChatModel

from src.agents.intake.agent import parse_questions_response
from src.drafting.exceptions import (
    MalformedExtractionError,
    MalformedQuestionsError,
    NoIntakeNotesError,
    ProjectNotFoundError,
)
from src.intake.service import IntakeService
from src.llm.mock import MOCK_EXTRACTION
from src.projects.models import AnswerType, InterviewQuestion

QUESTIONS_REPLY = json.dumps([
    {"order": 2, "category": "Components", "prompt": "List each component.", "answerType": "BULLETS", "required": True},
    {"order": 1, "category": "Problem", "prompt": "Who has the problem?", "helpText": "Be specific."},
])


def _project(notes="Ceramic stake with a bottle."):
    return SimpleNamespace(id=uuid.uuid4(), owner_id="owner-1", intake_notes=notes)


@pytest.fixture
def usage():
    fake = AsyncMock()
    fake.log_usage = AsyncMock()
    return fake


# ---------------------------------------------------------------------------
# Question parsing
# ---------------------------------------------------------------------------

def test_questions_are_sorted_and_renumbered():
    questions = parse_questions_response(QUESTIONS_REPLY)
    assert [q.order for q in questions] == [1, 2]
    assert questions[0].category == "Problem"
    assert questions[0].help_text == "Be specific."
    assert questions[0].answer_type == AnswerType.LONGTEXT
    assert questions[1].answer_type == AnswerType.BULLETS
    assert questions[1].required is True


def test_unknown_answer_type_becomes_longtext():
    questions = parse_questions_response('[{"order": 1, "prompt": "Q?", "answerType": "ESSAY"}]')
    assert questions[0].answer_type == AnswerType.LONGTEXT
    assert questions[0].category == "General"


@pytest.mark.parametrize("raw", ["[]", '{"questions": []}', "no json here", '[{"order": 1}]'])
def test_empty_or_unusable_question_output_is_malformed(raw):
    with pytest.raises(MalformedQuestionsError):
        parse_questions_response(raw)


# ---------------------------------------------------------------------------
# Service
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_generate_questions_persists_extraction_and_replaces_questions(db_session, usage, make_result):
    project = _project()
    db_session.get.return_value = project
    stored = [SimpleNamespace(order=1), SimpleNamespace(order=2)]
    db_session.execute.return_value = make_result(stored)

    llm = FakeListChatModel(responses=[json.dumps(MOCK_EXTRACTION), QUESTIONS_REPLY])
    with patch("src.agents.intake.agent.get_intake_llm", return_value=llm):
        result = await IntakeService(db_session, usage=usage).generate_questions(project.id)

    assert result == stored
    added = [c.args[0] for c in db_session.add.call_args_list]
    assert len(added) == 2
    assert all(isinstance(q, InterviewQuestion) for q in added)
    assert [q.prompt for q in added] == ["Who has the problem?", "List each component."]

    # extraction update, question delete, final list
    assert db_session.execute.await_count == 3
    assert db_session.commit.await_count == 2
    operations = [c.args[1] for c in usage.log_usage.await_args_list]
    assert operations == ["INTAKE_EXTRACTION", "QUESTION_GENERATION"]


@pytest.mark.asyncio
async def test_malformed_extraction_stops_before_question_generation(db_session, usage):
    project = _project()
    db_session.get.return_value = project
    llm = FakeListChatModel(responses=["Here's what I found: a stake."])
    with patch("src.agents.intake.agent.get_intake_llm", return_value=llm):
        with pytest.raises(MalformedExtractionError) as exc_info:
            await IntakeService(db_session, usage=usage).generate_questions(project.id)

    assert exc_info.value.user_message == "Extraction step failed. Please try again."
    db_session.execute.assert_not_awaited()
    db_session.add.assert_not_called()


@pytest.mark.asyncio
async def test_failed_question_generation_keeps_extraction_and_old_questions(db_session, usage):
    project = _project()
    db_session.get.return_value = project
    llm = FakeListChatModel(responses=[json.dumps(MOCK_EXTRACTION), "[]"])
    with patch("src.agents.intake.agent.get_intake_llm", return_value=llm):
        with pytest.raises(MalformedQuestionsError):
            await IntakeService(db_session, usage=usage).generate_questions(project.id)

    # Only the extraction update ran
    assert db_session.execute.await_count == 1
    db_session.commit.assert_awaited_once()
    db_session.add.assert_not_called()


@pytest.mark.asyncio
async def test_project_without_notes_is_rejected(db_session, usage):
    db_session.get.return_value = _project(notes=None)
    with pytest.raises(NoIntakeNotesError):
        await IntakeService(db_session, usage=usage).generate_questions(uuid.uuid4())


@pytest.mark.asyncio
async def test_unknown_project_is_rejected(db_session, usage):
    db_session.get.return_value = None
    with pytest.raises(ProjectNotFoundError):
        await IntakeService(db_session, usage=usage).generate_questions(uuid.uuid4())

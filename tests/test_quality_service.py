import json
import uuid
from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from langchain_core.language_models import FakeListChatModel

from src.drafting.exceptions import NoDraftError
from src.quality.models import IssueSeverity, IssueType, QualityIssue
from src.quality.service import QualityService, build_draft_text, parse_ai_issues

DRAFT = {
    "TITLE": "Watering Stake",
    "BACKGROUND": "Plants die.",
    "DETAILED_DESC": "x" * 600,
    "ABSTRACT": "A stake.",
    "CLAIMS": "1. The widget has a sensor.",
}

AI_REPLY = json.dumps({
    "issues": [
        {
            "type": "VAGUE_TERM",
            "severity": "MED",
            "message": "Claim 1 uses 'substantially' without a standard",
            "metadata": {"location": "Claim 1"},
        },
        {"type": "NOT_A_TYPE", "severity": "HIGH", "message": "dropped"},
    ]
})


class FakeStore:
    def __init__(self, sections):
        self.project = SimpleNamespace(id=uuid.uuid4(), owner_id="owner-1")
        self._sections = sections

    async def get_project(self, project_id):
        return self.project

    async def sections_map(self, project_id):
        return dict(self._sections)


@pytest.fixture
def usage():
    fake = AsyncMock()
    fake.log_usage = AsyncMock()
    return fake


def test_draft_text_is_in_canonical_order_with_labels():
    text = build_draft_text({"CLAIMS": "1. A stake.", "TITLE": "Stake", "SUMMARY": ""})
    assert text == "## Title of Invention\nStake\n\n## Claims\n1. A stake."


def test_parse_ai_issues_skips_invalid_entries():
    issues = parse_ai_issues(AI_REPLY)
    assert len(issues) == 1
    assert issues[0].type == IssueType.VAGUE_TERM
    assert issues[0].severity == IssueSeverity.MED


def test_parse_ai_issues_tolerates_missing_list():
    assert parse_ai_issues('{"result": "fine"}') == []


@pytest.mark.asyncio
async def test_quality_check_merges_ai_and_heuristic_and_replaces_issues(db_session, usage):
    store = FakeStore(DRAFT)
    service = QualityService(db_session, store=store, usage=usage)
    with patch("src.quality.service.get_quality_llm", return_value=FakeListChatModel(responses=[AI_REPLY])):
        issues = await service.run_quality_check(store.project.id)

    assert [i.type for i in issues] == [IssueType.VAGUE_TERM, IssueType.ANTECEDENT_BASIS]

    # One delete, one insert per issue, a single commit
    db_session.execute.assert_awaited_once()
    added = [c.args[0] for c in db_session.add.call_args_list]
    assert len(added) == 2
    assert all(isinstance(row, QualityIssue) for row in added)
    assert added[1].issue_metadata == {"location": "Claim 1", "phrase": "widget"}
    assert [row.position for row in added] == [0, 1]
    db_session.commit.assert_awaited_once()

    usage.log_usage.assert_awaited_once()
    assert usage.log_usage.await_args.args[1] == "QUALITY_CHECK"


@pytest.mark.asyncio
async def test_ai_failure_falls_back_to_heuristics(db_session, usage):
    store = FakeStore(DRAFT)
    service = QualityService(db_session, store=store, usage=usage)
    broken = SimpleNamespace(ainvoke=AsyncMock(side_effect=RuntimeError("timeout")))
    with patch("src.quality.service.get_quality_llm", return_value=broken):
        issues = await service.run_quality_check(store.project.id)

    assert [i.type for i in issues] == [IssueType.ANTECEDENT_BASIS]
    usage.log_usage.assert_not_awaited()


@pytest.mark.asyncio
async def test_unparseable_ai_reply_falls_back_to_heuristics(db_session, usage):
    store = FakeStore(DRAFT)
    service = QualityService(db_session, store=store, usage=usage)
    with patch("src.quality.service.get_quality_llm", return_value=FakeListChatModel(responses=["No issues!"])):
        issues = await service.run_quality_check(store.project.id)

    assert [i.type for i in issues] == [IssueType.ANTECEDENT_BASIS]


@pytest.mark.asyncio
async def test_duplicate_messages_are_kept_once(db_session, usage):
    store = FakeStore({**DRAFT, "CLAIMS": ""})
    duplicate = json.dumps({"issues": [{
        "type": "MISSING_SUPPORT",
        "severity": "HIGH",
        "message": "Missing required section: Claims",
        "metadata": {"location": "AI"},
    }]})
    service = QualityService(db_session, store=store, usage=usage)
    with patch("src.quality.service.get_quality_llm", return_value=FakeListChatModel(responses=[duplicate])):
        issues = await service.run_quality_check(store.project.id)

    assert len(issues) == 1
    assert issues[0].metadata["location"] == "AI"


@pytest.mark.asyncio
async def test_no_draft_raises_before_any_llm_call(db_session, usage):
    service = QualityService(db_session, store=FakeStore({}), usage=usage)
    with patch("src.quality.service.get_quality_llm") as get_llm:
        with pytest.raises(NoDraftError, match="No draft generated yet"):
            await service.run_quality_check(uuid.uuid4())
    get_llm.assert_not_called()
    db_session.commit.assert_not_awaited()


@pytest.mark.asyncio
async def test_failed_replacement_rolls_back(db_session, usage):
    db_session.commit.side_effect = RuntimeError("write failed")
    store = FakeStore(DRAFT)
    service = QualityService(db_session, store=store, usage=usage)
    with patch("src.quality.service.get_quality_llm", return_value=FakeListChatModel(responses=[AI_REPLY])):
        with pytest.raises(RuntimeError):
            await service.run_quality_check(store.project.id)
    db_session.rollback.assert_awaited_once()


@pytest.mark.asyncio
async def test_stored_issues_are_listed_in_merged_order(db_session, make_result):
    db_session.execute.return_value = make_result([])
    await QualityService(db_session, store=FakeStore(DRAFT)).list_issues(uuid.uuid4())

    query = str(db_session.execute.await_args.args[0])
    assert "ORDER BY quality_issues.position" in query

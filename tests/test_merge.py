from src.quality.merge import merge_issues
from src.quality.models import IssueSeverity, IssueType
from src.quality.schemas import QualityIssueData


def _issue(message, severity=IssueSeverity.HIGH, location="Claim 1"):
    return QualityIssueData(
        type=IssueType.ANTECEDENT_BASIS,
        severity=severity,
        message=message,
        metadata={"location": location},
    )


def test_ai_first_then_heuristic_with_exact_duplicates_dropped():
    ai = [_issue("A"), _issue("B")]
    heuristic = [_issue("B"), _issue("C")]
    assert [i.message for i in merge_issues(ai, heuristic)] == ["A", "B", "C"]


def test_first_occurrence_wins():
    ai = [_issue("Same", severity=IssueSeverity.LOW, location="AI")]
    heuristic = [_issue("Same", severity=IssueSeverity.HIGH, location="Heuristic")]
    merged = merge_issues(ai, heuristic)
    assert len(merged) == 1
    assert merged[0].severity == IssueSeverity.LOW
    assert merged[0].metadata["location"] == "AI"


def test_matching_is_case_sensitive():
    merged = merge_issues([_issue("missing antecedent")], [_issue("Missing antecedent")])
    assert len(merged) == 2


def test_duplicates_within_one_list_are_dropped():
    assert [i.message for i in merge_issues([], [_issue("X"), _issue("X")])] == ["X"]


def test_empty_inputs():
    assert merge_issues([], []) == []

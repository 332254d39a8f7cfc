"""Rule-based quality checks over a draft's section map."""

from src.quality.heuristics import find_missing_antecedent, run_heuristic_checks
from src.quality.models import IssueSeverity, IssueType

LONG_DETAIL = "x" * 600

COMPLETE_DRAFT = {
    "TITLE": "Watering Stake",
    "BACKGROUND": "Plants die.",
    "DETAILED_DESC": LONG_DETAIL,
    "ABSTRACT": "A stake that waters plants.",
    "CLAIMS": "1. A stake comprising a reservoir.",
}


def _messages(issues):
    return [i.message for i in issues]


# ---------------------------------------------------------------------------
# Completeness
# ---------------------------------------------------------------------------

def test_complete_draft_has_no_issues():
    assert run_heuristic_checks(COMPLETE_DRAFT) == []


def test_missing_claims_and_abstract_yield_two_completeness_issues():
    sections = {k: v for k, v in COMPLETE_DRAFT.items() if k not in ("CLAIMS", "ABSTRACT")}
    issues = run_heuristic_checks(sections)

    assert _messages(issues) == [
        "Missing required section: Abstract",
        "Missing required section: Claims",
    ]
    for issue in issues:
        assert issue.type == IssueType.MISSING_SUPPORT
        assert issue.severity == IssueSeverity.HIGH
    assert issues[0].metadata["location"] == "Abstract"


def test_empty_map_reports_every_required_section():
    issues = run_heuristic_checks({})
    assert _messages(issues) == [
        "Missing required section: Background of the Invention",
        "Missing required section: Detailed Description of Embodiments",
        "Missing required section: Abstract",
        "Missing required section: Claims",
    ]


def test_unknown_keys_are_ignored():
    sections = {**COMPLETE_DRAFT, "NOTES": "1. The gizmo has a lever.", "claims": ""}
    assert run_heuristic_checks(sections) == []


# ---------------------------------------------------------------------------
# Thin detailed description
# ---------------------------------------------------------------------------

def test_detailed_description_of_499_chars_is_thin():
    issues = run_heuristic_checks({**COMPLETE_DRAFT, "DETAILED_DESC": "x" * 499})
    assert len(issues) == 1
    assert issues[0].severity == IssueSeverity.MED
    assert issues[0].type == IssueType.MISSING_SUPPORT
    assert issues[0].metadata["location"] == "Detailed Description of Embodiments"


def test_detailed_description_of_500_chars_is_not_thin():
    assert run_heuristic_checks({**COMPLETE_DRAFT, "DETAILED_DESC": "x" * 500}) == []


def test_blank_detailed_description_is_only_reported_missing():
    issues = run_heuristic_checks({**COMPLETE_DRAFT, "DETAILED_DESC": "   "})
    assert len(issues) == 1
    assert issues[0].severity == IssueSeverity.HIGH
    assert issues[0].message.startswith("Missing required section: Detailed")


# ---------------------------------------------------------------------------
# Abstract length
# ---------------------------------------------------------------------------

def test_abstract_of_150_words_passes():
    assert run_heuristic_checks({**COMPLETE_DRAFT, "ABSTRACT": " ".join(["word"] * 150)}) == []


def test_abstract_of_151_words_is_flagged():
    issues = run_heuristic_checks({**COMPLETE_DRAFT, "ABSTRACT": " ".join(["word"] * 151)})
    assert len(issues) == 1
    assert issues[0].severity == IssueSeverity.LOW
    assert issues[0].type == IssueType.VAGUE_TERM
    assert "150" in issues[0].message


# ---------------------------------------------------------------------------
# Antecedent basis
# ---------------------------------------------------------------------------

def test_definite_reference_without_antecedent_is_flagged():
    issues = run_heuristic_checks({**COMPLETE_DRAFT, "CLAIMS": "1. The widget has a sensor."})
    assert len(issues) == 1
    issue = issues[0]
    assert issue.type == IssueType.ANTECEDENT_BASIS
    assert issue.severity == IssueSeverity.HIGH
    assert issue.metadata["location"] == "Claim 1"
    assert "widget" in issue.message


def test_stoplisted_noun_and_introduced_term_pass():
    claims = "2. The device comprising a widget and the widget is red."
    assert run_heuristic_checks({**COMPLETE_DRAFT, "CLAIMS": claims}) == []


def test_one_issue_per_claim_line():
    claims = "\n".join([
        "1. A stake comprising a reservoir.",
        "",
        "2. The valve of the housing, wherein the disc swells.",
        "3. The stake of claim 1, wherein the reservoir is refillable.",
    ])
    issues = run_heuristic_checks({**COMPLETE_DRAFT, "CLAIMS": claims})
    assert [i.metadata["location"] for i in issues] == ["Claim 2", "Claim 3"]


def test_unnumbered_lines_are_not_claims():
    claims = "What is claimed is: the widget, as shown.\n1. A widget comprising a lever."
    assert run_heuristic_checks({**COMPLETE_DRAFT, "CLAIMS": claims}) == []


def test_antecedent_matching_is_case_insensitive():
    assert find_missing_antecedent("1. A Sensor and a housing, wherein the sensor is sealed.") is None


def test_antecedent_must_come_before_the_reference():
    assert find_missing_antecedent("1. The lever of a lever.") == "lever"


def test_multi_word_phrase_before_of():
    assert find_missing_antecedent("4. The float valve of claim 3.") == "float valve"
    assert find_missing_antecedent("4. A float valve, wherein the float valve in use.") is None


def test_stoplisted_first_word_does_not_hide_compound_nouns():
    assert find_missing_antecedent("1. A pump, wherein the device housing is red.") == "device housing"
    assert find_missing_antecedent("1. A pump and a device housing, wherein the device housing is red.") is None


def test_generic_references_need_no_antecedent():
    assert find_missing_antecedent("2. The method according to claim 1, wherein a pump is used.") is None
    assert find_missing_antecedent("3. A pump as used in the present invention.") is None


def test_issue_order_follows_rule_order():
    sections = {
        "BACKGROUND": "Plants die.",
        "DETAILED_DESC": "short",
        "ABSTRACT": " ".join(["word"] * 200),
        "CLAIMS": "1. The widget has a sensor.",
    }
    types = [i.type for i in run_heuristic_checks(sections)]
    assert types == [IssueType.MISSING_SUPPORT, IssueType.VAGUE_TERM, IssueType.ANTECEDENT_BASIS]

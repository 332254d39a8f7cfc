"""Rule-based draft checks that need no LLM.

Every rule runs independently over a ``section_key -> text`` map; unknown keys
are ignored. Issues come out in rule order: completeness, thin detail, abstract
length, then antecedent basis in claim order.

The antecedent-basis rule is a natural-language heuristic, not a grammar:
false positives and negatives are expected. Stoplisted nouns are skipped only
as a whole phrase ("the system", "the device of claim 1"), so "the device
housing" still needs "a device housing" earlier in the claim.
"""

import re
from typing import Dict, List, Mapping, Optional

from src.drafting.models import SECTION_LABELS, SectionKey
from src.quality.models import IssueSeverity, IssueType
from src.quality.schemas import QualityIssueData

REQUIRED_SECTIONS = (
    SectionKey.BACKGROUND,
    SectionKey.DETAILED_DESC,
    SectionKey.ABSTRACT,
    SectionKey.CLAIMS,
)

MIN_DETAILED_DESC_CHARS = 500
MAX_ABSTRACT_WORDS = 150

# Generic nouns that never need an antecedent ("the present invention", "the system of claim 1")
ANTECEDENT_STOPLIST = frozenset({"claim", "invention", "device", "method", "system", "present"})

# Words that end a noun phrase besides punctuation
_PHRASE_TERMINATORS = (
    "of", "in", "is", "are", "has", "have", "comprises", "comprising", "includes",
    "including", "and", "or", "to", "with", "for", "that", "which", "wherein",
    "whereby", "being", "configured", "on", "at", "by", "from", "when", "according",
    "as",
)
_TERMINATOR_ALT = "|".join(_PHRASE_TERMINATORS)
_WORD = rf"(?!(?:{_TERMINATOR_ALT})\b)[a-z][a-z-]*"

# "the" + 1-3 words, ended by punctuation or a terminator word
_DEFINITE_PHRASE_RE = re.compile(
    rf"\bthe\s+({_WORD}(?:\s+{_WORD}){{0,2}}?)(?=\s*[,;:.]|\s+(?:{_TERMINATOR_ALT})\b)",
    re.IGNORECASE,
)
_CLAIM_LINE_RE = re.compile(r"^(\d+)\.")


def _present(sections: Mapping[str, str], key: SectionKey) -> bool:
    return bool((sections.get(key.value) or "").strip())


def _check_completeness(sections: Mapping[str, str]) -> List[QualityIssueData]:
    issues = []
    for key in REQUIRED_SECTIONS:
        if not _present(sections, key):
            label = SECTION_LABELS[key]
            issues.append(QualityIssueData(
                type=IssueType.MISSING_SUPPORT,
                severity=IssueSeverity.HIGH,
                message=f"Missing required section: {label}",
                metadata={"location": label},
            ))
    return issues


def _check_thin_detail(sections: Mapping[str, str]) -> List[QualityIssueData]:
    if not _present(sections, SectionKey.DETAILED_DESC):
        return []
    text = sections[SectionKey.DETAILED_DESC.value]
    if len(text) < MIN_DETAILED_DESC_CHARS:
        return [QualityIssueData(
            type=IssueType.MISSING_SUPPORT,
            severity=IssueSeverity.MED,
            message=(
                "Detailed description is very short. Consider adding more technical detail "
                "about how the invention works."
            ),
            metadata={"location": SECTION_LABELS[SectionKey.DETAILED_DESC]},
        )]
    return []


def _check_abstract_length(sections: Mapping[str, str]) -> List[QualityIssueData]:
    words = len((sections.get(SectionKey.ABSTRACT.value) or "").split())
    if words > MAX_ABSTRACT_WORDS:
        return [QualityIssueData(
            type=IssueType.VAGUE_TERM,
            severity=IssueSeverity.LOW,
            message=(
                f"Abstract is {words} words long. USPTO abstracts should not exceed "
                f"{MAX_ABSTRACT_WORDS} words."
            ),
            metadata={"location": SECTION_LABELS[SectionKey.ABSTRACT], "word_count": words},
        )]
    return []


def find_missing_antecedent(claim_line: str) -> Optional[str]:
    """Return the first "the X" phrase in a claim with no earlier "a X"/"an X", if any."""
    for match in _DEFINITE_PHRASE_RE.finditer(claim_line):
        phrase = match.group(1).lower()
        if phrase in ANTECEDENT_STOPLIST or phrase.split()[0] == "present":
            continue
        introduced = re.search(
            rf"\b(?:a|an)\s+{re.escape(phrase)}\b",
            claim_line[:match.start()],
            re.IGNORECASE,
        )
        if not introduced:
            return phrase
    return None


def _check_antecedent_basis(sections: Mapping[str, str]) -> List[QualityIssueData]:
    issues = []
    claims = sections.get(SectionKey.CLAIMS.value) or ""
    for raw_line in claims.splitlines():
        line = raw_line.strip()
        numbered = _CLAIM_LINE_RE.match(line)
        if not numbered:
            continue
        phrase = find_missing_antecedent(line)
        if phrase is None:
            continue
        claim_number = numbered.group(1)
        issues.append(QualityIssueData(
            type=IssueType.ANTECEDENT_BASIS,
            severity=IssueSeverity.HIGH,
            message=(
                f'Claim {claim_number} references "the {phrase}" without first introducing '
                f'"a {phrase}" or "an {phrase}"'
            ),
            metadata={"location": f"Claim {claim_number}", "phrase": phrase},
        ))
    return issues


def run_heuristic_checks(sections: Mapping[str, str]) -> List[QualityIssueData]:
    known: Dict[str, str] = {k: v for k, v in sections.items() if k in SectionKey.__members__}
    return [
        *_check_completeness(known),
        *_check_thin_detail(known),
        *_check_abstract_length(known),
        *_check_antecedent_basis(known),
    ]

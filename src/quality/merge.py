from typing import List, Sequence

from src.quality.schemas import QualityIssueData


def merge_issues(
    ai_issues: Sequence[QualityIssueData],
    heuristic_issues: Sequence[QualityIssueData],
) -> List[QualityIssueData]:
    """AI issues first, then heuristic ones, dropping exact duplicate messages.

    Matching is case-sensitive and the first occurrence wins.
    """
    seen = set()
    merged = []
    for issue in [*ai_issues, *heuristic_issues]:
        if issue.message in seen:
            continue
        seen.add(issue.message)
        merged.append(issue)
    return merged

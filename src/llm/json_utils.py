"""Best-effort JSON extraction from raw model output.

Strategy, in order:

1. Strip markdown fences and parse the whole string.
2. Slice from the first ``{`` (or ``[`` when there is no brace) to the last
   matching close character and parse that.
3. Raise :class:`JSONExtractionError` with a bounded excerpt of the raw text.
"""

import json
import re
from typing import Any

EXCERPT_LIMIT = 300

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)


class JSONExtractionError(ValueError):
    """Raised when no JSON document can be recovered from model output."""

    def __init__(self, label: str, raw: str, limit: int = EXCERPT_LIMIT):
        self.label = label
        self.excerpt = raw[:limit]
        super().__init__(
            f"{label}: could not extract valid JSON. "
            f"Raw output (first {limit} chars): {self.excerpt}"
        )


def strip_fences(raw: str) -> str:
    return _FENCE_RE.sub("", raw).strip()


def extract_json(raw: str, label: str = "AI response") -> Any:
    stripped = strip_fences(raw)
    if stripped:
        try:
            return json.loads(stripped)
        except json.JSONDecodeError:
            pass

    open_char = "{" if "{" in raw else "["
    close_char = "}" if open_char == "{" else "]"
    start = raw.find(open_char)
    end = raw.rfind(close_char)
    if start != -1 and end > start:
        try:
            return json.loads(raw[start:end + 1])
        except json.JSONDecodeError:
            pass

    raise JSONExtractionError(label, raw)

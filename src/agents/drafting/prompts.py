"""Prompt builders for the specification sections and the claim set.

Sections are requested as JSON, claims as numbered plain text. The disclaimer
constants are reproduced verbatim in the model output and downstream consumers
trim on them, so do not reword them.
"""

from pathlib import Path

CLAIMS_DISCLAIMER = """\
(CONFIDENTIAL — These claims are a preliminary draft for informational purposes only.
They do not constitute legal advice and must be reviewed by a registered patent attorney
or agent before filing with the USPTO or any other patent office.)"""

ABSTRACT_DISCLAIMER = "(CONFIDENTIAL — Draft for informational purposes only. Not legal advice.)"

DEFAULT_SYSTEM_PROMPT = """You are a patent drafting assistant helping solo inventors write US provisional patent applications.
Write clear, detailed, legally structured patent specification sections using consistent terminology.
Write in formal patent language. Do NOT provide legal advice — this is a draft for informational purposes only.
Mark all outputs as CONFIDENTIAL."""

_RULE = "─" * 56


def load_system_prompt(path: str | Path) -> str:
    """Read the patent-writer system prompt; fall back to the built-in one if the file is absent."""
    prompt_path = Path(path)
    if not prompt_path.is_file():
        return DEFAULT_SYSTEM_PROMPT
    return prompt_path.read_text(encoding="utf-8").strip() or DEFAULT_SYSTEM_PROMPT


def build_draft_sections_prompt(context: str) -> str:
    return f"""\
You are drafting the specification sections of a US provisional patent application.

INVENTION DISCLOSURE:
{context}

Generate EXACTLY the following 6 patent specification sections as a single JSON object.
The JSON must have a top-level key "sections" containing exactly these keys:
TITLE, BACKGROUND, SUMMARY, DRAWINGS, DETAILED_DESC, ABSTRACT.

{_RULE}
SECTION REQUIREMENTS
{_RULE}

TITLE
  • 5–15 words. Descriptive. No articles ("A", "An") at the start. No quotation marks.

BACKGROUND
  • 3–5 paragraphs. Use present tense.
  • Paragraph 1: Technical field (one sentence, "The present invention relates to…").
  • Paragraph 2–3: Problem description. Who experiences it? How often? What are the consequences?
  • Paragraph 4–5: Shortcomings of existing solutions. Do NOT describe the invention yet.
  • Separate paragraphs with a blank line (\\n\\n).

SUMMARY
  • 2–3 paragraphs. Start with: "The present invention provides…"
  • Do NOT repeat claims verbatim. Do NOT include reference numerals.
  • Separate paragraphs with a blank line (\\n\\n).

DRAWINGS
  • One sentence per figure: "FIG. N is a [type] view of [subject]."
  • Use the figures the inventor listed. If none, write: "No drawings are included with this provisional application."
  • Separate figures with a newline (\\n).

DETAILED_DESC
  • 6–10 paragraphs. This is the MOST IMPORTANT section — be thorough.
  • Assign reference numerals to ALL physical components, e.g. "reservoir (100)".
  • Cover all components and their functions, how they interact, the complete operating cycle,
    every embodiment described by the inventor, and edge cases and failure modes.
  • Use EXACT component names consistently across all paragraphs.
  • Separate paragraphs with a blank line (\\n\\n).

ABSTRACT
  • One paragraph, 150 words maximum.
  • Summarise the invention and its principal advantages. No reference numerals.
  • End with: "{ABSTRACT_DISCLAIMER}"

{_RULE}
OUTPUT FORMAT — STRICT
{_RULE}
Return ONLY the following JSON (no markdown fences, no extra text before or after):

{{
  "sections": {{
    "TITLE": "...",
    "BACKGROUND": "...",
    "SUMMARY": "...",
    "DRAWINGS": "...",
    "DETAILED_DESC": "...",
    "ABSTRACT": "..."
  }}
}}"""


def build_claims_prompt(context: str) -> str:
    return f"""\
You are drafting the claims section of a US provisional patent application.

INVENTION DISCLOSURE:
{context}

Write a complete, well-structured patent claim set. Follow every rule below exactly.

{_RULE}
CLAIM DRAFTING RULES
{_RULE}

STRUCTURE
  • Write 1–3 INDEPENDENT claims (broad scope, stand alone).
  • Write 5–10 DEPENDENT claims that progressively narrow the independent claims.
  • Total claim count: 8–12 claims.

INDEPENDENT CLAIM FORMAT
  "[Claim number]. A [device / method / system / apparatus] comprising:
    [first element];
    [second element]; and
    [last element]."
  For METHOD claims use: "A method of [doing X], comprising: [step 1]; [step 2]; and [step N]."

DEPENDENT CLAIM FORMAT
  "[Claim number]. The [device / method / system] of claim [N], wherein [limitation]."
  For adding an element: "…further comprising [element]."

CRITICAL RULES
  1. EACH CLAIM IS EXACTLY ONE SENTENCE ending with a period.
  2. Use "comprising" for independent claims.
  3. Introduce every element with "a" or "an" before referring to it with "the".
  4. Claims must be fully supported by the invention disclosure above.
  5. Make independent claims as BROAD as the disclosure supports.
  6. Do NOT use "means for…" language without defining supporting structure.
  7. Do NOT include explanations, commentary, or analysis — claims only.
  8. Number claims sequentially: 1, 2, 3, …
  9. Leave ONE blank line between each claim.
  10. If the invention is both a device AND a method, include an independent claim for each.

{_RULE}
DISCLAIMER (include verbatim as the final line)
{_RULE}
{CLAIMS_DISCLAIMER}

{_RULE}
OUTPUT FORMAT — STRICT
{_RULE}
Return ONLY the numbered claims followed by the disclaimer, as plain text.
No JSON. No markdown. No headers. No explanatory paragraphs.

Example format:
1. A [device] comprising: [element A]; [element B]; and [element C].

2. The [device] of claim 1, wherein [limitation].

{CLAIMS_DISCLAIMER}"""

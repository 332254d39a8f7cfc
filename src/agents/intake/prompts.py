from typing import Optional

EXTRACTION_SYSTEM_PROMPT = "You are a patent intake specialist. Return only valid JSON."

QUESTION_GENERATION_SYSTEM_PROMPT = "You are a patent interview specialist. Return only valid JSON."

EXTRACTION_KEYS = (
    "problem",
    "solution",
    "novelty",
    "system_components",
    "method_steps",
    "alternatives",
    "advantages",
    "use_cases",
    "keywords",
    "potential_prior_art",
)

# Inventor notes are truncated before being echoed back into the question prompt
NOTES_EXCERPT_LIMIT = 2000


def build_extraction_prompt(notes: str, pdf_text: Optional[str] = None, transcript: Optional[str] = None) -> str:
    sources = [f"INVENTOR NOTES:\n{notes.strip()}"]
    if pdf_text and pdf_text.strip():
        sources.append(f"PDF DOCUMENT TEXT:\n{pdf_text.strip()}")
    if transcript and transcript.strip():
        sources.append(f"VOICE TRANSCRIPT:\n{transcript.strip()}")
    joined = "\n\n---\n\n".join(sources)

    return f"""You are a patent intake specialist. An inventor has provided the following raw description of their invention. Extract the key technical signals and output ONLY a valid JSON object with exactly these keys. Use "unknown" for any field not evident in the input — never omit a key.

{joined}

Output exactly this JSON structure (no markdown, no explanation):
{{
  "problem": "The specific problem or pain point this invention solves",
  "solution": "The core technical solution / what the invention is",
  "novelty": "What is genuinely new or non-obvious about this invention",
  "system_components": "Major physical or logical components of the invention",
  "method_steps": "Step-by-step process or method if applicable",
  "alternatives": "Alternative configurations or embodiments mentioned",
  "advantages": "Concrete benefits over existing solutions",
  "use_cases": "Real-world scenarios where this invention would be used",
  "keywords": "Key technical terms and domain keywords",
  "potential_prior_art": "Existing products, patents, or approaches that might be similar"
}}"""


def build_question_generation_prompt(extracted_json: str, original_notes: str) -> str:
    return f"""You are a patent interview specialist. Based on the structured invention analysis below, generate a tailored set of 12–20 interview questions that will gather the information needed to draft a strong US provisional patent application.

STRUCTURED INVENTION ANALYSIS:
{extracted_json}

ORIGINAL INVENTOR NOTES (for context):
{original_notes[:NOTES_EXCERPT_LIMIT]}

REQUIREMENTS:
- Generate 12–20 questions ordered from high-level/conceptual to detailed/technical
- Cover these categories as appropriate: Background, Problem, Solution, Novelty, Components, Flow/Steps, Variations, Edge Cases, Claims Support, Drawings
- Skip categories where the inventor's notes already provide thorough detail
- Add extra depth to areas that are sparse or unclear in the notes
- Mark questions as required=true only if they are essential for a complete patent draft
- answerType: use "TEXT" for short answers (name, title), "BULLETS" for lists, "LONGTEXT" for detailed descriptions

Output ONLY a valid JSON array with no markdown fences or explanation:
[
  {{
    "order": 1,
    "category": "Background",
    "prompt": "The specific question to ask the inventor",
    "helpText": "Guidance or example to help the inventor answer well",
    "answerType": "TEXT" | "BULLETS" | "LONGTEXT",
    "required": true | false
  }}
]"""

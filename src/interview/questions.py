"""The fixed static questionnaire: twenty questions across six steps.

Question keys double as the field names of the static invention context, so the
order here is the order of keys in the context JSON.
"""

from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel


class Question(BaseModel):
    key: str
    title: str
    prompt: str
    type: str = "textarea"
    required: bool = False
    min_length: Optional[int] = None


class InterviewStep(BaseModel):
    id: int
    title: str
    questions: List[Question]


class Completeness(BaseModel):
    answered: int
    total: int
    pct: int


INTERVIEW_STEPS: List[InterviewStep] = [
    InterviewStep(id=0, title="The Invention", questions=[
        Question(key="invention_title", title="Invention Title",
                 prompt="What is the name of your invention?",
                 type="text", required=True, min_length=3),
        Question(key="one_sentence_summary", title="One-Sentence Summary",
                 prompt="Describe your invention in one sentence.",
                 type="text", required=True, min_length=20),
        Question(key="problem_statement", title="Problem Statement",
                 prompt="What problem or need does your invention address?",
                 required=True, min_length=50),
    ]),
    InterviewStep(id=1, title="Prior Art & Novelty", questions=[
        Question(key="existing_solutions", title="Existing Solutions",
                 prompt="What existing products, patents, or approaches attempt to solve this problem?"),
        Question(key="what_is_new", title="Novel Aspects",
                 prompt="What is genuinely new or non-obvious about your invention?",
                 required=True, min_length=50),
    ]),
    InterviewStep(id=2, title="How It Works", questions=[
        Question(key="core_components", title="Core Components",
                 prompt="List and describe each major component of your invention.",
                 required=True, min_length=30),
        Question(key="system_overview", title="System Overview",
                 prompt="How does the overall system work? Walk through the complete operating cycle.",
                 required=True, min_length=50),
        Question(key="main_flow_steps", title="Step-by-Step Process",
                 prompt="If your invention involves a method or process, list the steps in sequence."),
        Question(key="alternative_variations", title="Alternative Variations",
                 prompt="What alternative configurations or embodiments of your invention could exist?"),
    ]),
    InterviewStep(id=3, title="Technical Details", questions=[
        Question(key="key_parameters", title="Key Parameters & Specifications",
                 prompt="What are the critical dimensions, values, ranges, or settings?"),
        Question(key="data_inputs_outputs", title="Inputs & Outputs",
                 prompt="What are the inputs to your invention, and what are the outputs or results?"),
        Question(key="edge_cases_failures", title="Edge Cases & Failure Modes",
                 prompt="What happens in abnormal or boundary situations? How are errors handled?"),
    ]),
    InterviewStep(id=4, title="Value & Context", questions=[
        Question(key="advantages", title="Advantages & Benefits",
                 prompt="What concrete advantages does your invention provide over existing solutions?",
                 required=True, min_length=30),
        Question(key="example_use_case", title="Example Use Case",
                 prompt="Walk through a concrete, real-world scenario of someone using your invention."),
        Question(key="user_roles", title="User Roles",
                 prompt="Who uses your invention, and what role does each person play?"),
        Question(key="deployment_environment", title="Deployment Environment",
                 prompt="Where and in what context is your invention used or deployed?"),
    ]),
    InterviewStep(id=5, title="Compliance & Reference", questions=[
        Question(key="security_privacy", title="Security & Privacy Considerations",
                 prompt="Does your invention handle sensitive data, require authentication, or have security implications?"),
        Question(key="performance_constraints", title="Performance Constraints",
                 prompt="Are there minimum performance requirements your invention must meet to be useful?"),
        Question(key="drawings_list", title="Drawings & Figures",
                 prompt="What drawings or diagrams would best illustrate your invention?"),
        Question(key="definitions_glossary", title="Definitions & Glossary",
                 prompt="Define any technical terms, acronyms, or specialized vocabulary used in your description."),
    ]),
]

ALL_QUESTIONS: List[Question] = [q for step in INTERVIEW_STEPS for q in step.questions]

QUESTION_KEYS: List[str] = [q.key for q in ALL_QUESTIONS]

REQUIRED_QUESTIONS: List[Question] = [q for q in ALL_QUESTIONS if q.required]


def _is_answered(question: Question, answers: Mapping[str, str]) -> bool:
    value = (answers.get(question.key) or "").strip()
    return len(value) >= (question.min_length or 1)


def compute_completeness(answers: Mapping[str, str]) -> Completeness:
    """Share of required questions answered with their minimum length met."""
    total = len(REQUIRED_QUESTIONS)
    answered = sum(1 for q in REQUIRED_QUESTIONS if _is_answered(q, answers))
    pct = 100 if total == 0 else round(answered / total * 100)
    return Completeness(answered=answered, total=total, pct=pct)


def is_step_complete(step: InterviewStep, answers: Mapping[str, str]) -> bool:
    return all(_is_answered(q, answers) for q in step.questions if q.required)


def questions_by_key() -> Dict[str, Question]:
    return {q.key: q for q in ALL_QUESTIONS}

from src.llm.json_utils import EXCERPT_LIMIT


class DraftingError(Exception):
    """Base class for errors surfaced to the caller as user-facing messages."""


# ---------------------------------------------------------------------------
# Input-state errors: the project is not ready for the requested operation
# ---------------------------------------------------------------------------

class InputStateError(DraftingError):
    pass


class ProjectNotFoundError(InputStateError):
    def __init__(self, project_id):
        super().__init__(f"Project {project_id} not found")


class NoAnswersError(InputStateError):
    def __init__(self):
        super().__init__("No interview answers found. Please complete the interview first.")


class NoQuestionsError(InputStateError):
    def __init__(self):
        super().__init__("No interview questions found. Please generate the interview questions first.")


class NoIntakeNotesError(InputStateError):
    def __init__(self):
        super().__init__("No intake notes found for this project")


class NoDraftError(InputStateError):
    def __init__(self):
        super().__init__("No draft generated yet")


# ---------------------------------------------------------------------------
# Malformed AI output: never retried here, caller shows a "try again" message
# ---------------------------------------------------------------------------

class MalformedOutputError(DraftingError):
    user_message = "The AI returned an unexpected response. Please try again."
    label = "AI response"

    def __init__(self, raw: str):
        self.excerpt = raw[:EXCERPT_LIMIT]
        super().__init__(
            f"AI returned invalid JSON for {self.label}. "
            f"Raw output (first {EXCERPT_LIMIT} chars): {self.excerpt}"
        )


class MalformedSectionsError(MalformedOutputError):
    label = "draft sections"


class MalformedExtractionError(MalformedOutputError):
    user_message = "Extraction step failed. Please try again."
    label = "invention extraction"


class MalformedQuestionsError(MalformedOutputError):
    user_message = "Question generation failed. Please try again."
    label = "interview questions"

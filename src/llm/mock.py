"""Offline chat model for local development when no provider key is configured.

Returns structurally valid placeholder output (sections JSON, numbered claims,
extraction JSON, question array or an empty issue list) chosen by inspecting
the prompt. The text is placeholder content only and is not legal advice.
"""

import json
from typing import Any, List, Optional

from langchain_core.callbacks import CallbackManagerForLLMRun
from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import AIMessage, BaseMessage
from langchain_core.outputs import ChatGeneration, ChatResult

MOCK_SECTIONS = {
    "sections": {
        "TITLE": "Automated Soil-Moisture-Responsive Plant Watering System",
        "BACKGROUND": (
            "The present invention relates to automated plant care systems.\n\n"
            "Maintaining consistent soil moisture is critical to healthy plant growth. "
            "Existing passive wicking pots deliver water at a fixed rate regardless of soil "
            "moisture, while irrigation systems require plumbing and electrical power."
        ),
        "SUMMARY": (
            "The present invention provides a self-watering plant pot system that delivers "
            "water to soil when moisture drops below a user-defined threshold, without "
            "electrical power or external plumbing."
        ),
        "DRAWINGS": (
            "FIG. 1 is a perspective view of the assembled system.\n"
            "FIG. 2 is a cross-sectional view of the reservoir and valve assembly."
        ),
        "DETAILED_DESC": (
            "Referring to FIG. 1, the system (10) comprises a plant pot body (50), a water "
            "reservoir (100), a capacitive moisture sensor (102), a float valve assembly (104) "
            "and a drip tube (106).\n\n"
            "The sensor (102) measures the dielectric constant of the surrounding soil. When the "
            "measured moisture falls below the threshold set on the dial (110), the float valve "
            "assembly (104) opens and water flows from the reservoir (100) through the drip tube "
            "(106) into the soil. The valve closes once the threshold is reached."
        ),
        "ABSTRACT": (
            "A self-watering plant pot system comprises a water reservoir, a capacitive soil "
            "moisture sensor and a gravity-fed float valve in a self-contained housing. "
            "(MOCK OUTPUT - for development only. Not legal advice.)"
        ),
    }
}

MOCK_CLAIMS = """\
1. A self-watering plant pot system comprising: a reservoir configured to store water; a capacitive soil moisture sensor configured to output a signal; and a float valve assembly configured to release water from the reservoir in response to the signal.

2. The system of claim 1, wherein the capacitive soil moisture sensor comprises a pair of electrodes embedded in a wall of a plant pot body.

3. The system of claim 1, further comprising a drip tube fluidly connecting the reservoir to the soil.

(MOCK CLAIMS - for development only. Not legal advice. Consult a registered patent attorney before filing.)"""

MOCK_EXTRACTION = {
    "problem": "Potted plants die from inconsistent watering.",
    "solution": "A self-contained pot that waters soil when measured moisture drops below a threshold.",
    "novelty": "Passive gravity-fed valve controlled by an embedded capacitive sensor.",
    "system_components": "Reservoir, capacitive sensor, float valve, drip tube, threshold dial.",
    "method_steps": "Sense moisture; compare to threshold; open valve; close valve.",
    "alternatives": "Electronic solenoid version; greenhouse multi-pot version.",
    "advantages": "No electricity, precise moisture control, long autonomy.",
    "use_cases": "Home plant owners who travel.",
    "keywords": "self-watering, capacitive sensor, float valve",
    "potential_prior_art": "Wicking pots, drip irrigation, plant monitors.",
}

MOCK_QUESTIONS = [
    {
        "order": 1,
        "category": "Problem",
        "prompt": "Who experiences the watering problem and how often?",
        "helpText": "Describe the typical user and situation.",
        "answerType": "LONGTEXT",
        "required": True,
    },
    {
        "order": 2,
        "category": "Components",
        "prompt": "List each component and its function.",
        "helpText": "Use one consistent name per component.",
        "answerType": "BULLETS",
        "required": True,
    },
]

MOCK_USAGE = {"input_tokens": 500, "output_tokens": 1000, "total_tokens": 1500}


def _mock_response_for(prompt: str) -> str:
    # The review prompt embeds the whole draft, so test it first
    if '"issues"' in prompt:
        return json.dumps({"issues": []})
    if '"sections"' in prompt:
        return json.dumps(MOCK_SECTIONS)
    # Question generation embeds the extraction JSON, so test it first
    if '"answerType"' in prompt:
        return json.dumps(MOCK_QUESTIONS)
    if '"potential_prior_art"' in prompt:
        return json.dumps(MOCK_EXTRACTION)
    return MOCK_CLAIMS


class MockChatModel(BaseChatModel):
    """Deterministic stand-in provider selected with ``LLM_PROVIDER=mock``."""

    model_name: str = "mock"

    @property
    def _llm_type(self) -> str:
        return "mock"

    def _generate(
        self,
        messages: List[BaseMessage],
        stop: Optional[List[str]] = None,
        run_manager: Optional[CallbackManagerForLLMRun] = None,
        **kwargs: Any,
    ) -> ChatResult:
        prompt = str(messages[-1].content) if messages else ""
        message = AIMessage(
            content=_mock_response_for(prompt),
            usage_metadata=MOCK_USAGE,
            response_metadata={"model_name": self.model_name},
        )
        return ChatResult(generations=[ChatGeneration(message=message)])

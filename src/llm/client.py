"""Text-completion adapter over LangChain chat models.

The drafting core only needs ``generate_text(system, prompt) -> content + usage``.
Provider-level retries live in the chat model itself (``max_retries``); nothing
here retries.
"""

from typing import Any

from langchain_core.language_models.chat_models import BaseChatModel
from langchain_core.messages import HumanMessage, SystemMessage
from pydantic import BaseModel


class TokenUsageData(BaseModel):
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    model: str = "unknown"


class GenerationResult(BaseModel):
    content: str
    usage: TokenUsageData


def _content_to_text(content: Any) -> str:
    # Anthropic returns a list of content blocks
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return str(content or "")


def _model_name(llm: BaseChatModel, response_metadata: dict) -> str:
    return (
        response_metadata.get("model_name")
        or response_metadata.get("model")
        or getattr(llm, "model_name", None)
        or getattr(llm, "model", None)
        or llm.get_name()
    )


async def generate_text(llm: BaseChatModel, system: str, prompt: str) -> GenerationResult:
    """Run a single system+user completion and report its token usage."""
    response = await llm.ainvoke([
        SystemMessage(content=system),
        HumanMessage(content=prompt),
    ])

    usage_metadata = getattr(response, "usage_metadata", None) or {}
    prompt_tokens = usage_metadata.get("input_tokens", 0)
    completion_tokens = usage_metadata.get("output_tokens", 0)

    return GenerationResult(
        content=_content_to_text(response.content),
        usage=TokenUsageData(
            prompt_tokens=prompt_tokens,
            completion_tokens=completion_tokens,
            total_tokens=usage_metadata.get("total_tokens", prompt_tokens + completion_tokens),
            model=str(_model_name(llm, getattr(response, "response_metadata", None) or {})),
        ),
    )

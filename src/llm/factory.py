from __future__ import annotations

from typing import TYPE_CHECKING

from src.config import settings

if TYPE_CHECKING:
    from langchain_core.language_models.chat_models import BaseChatModel

# Valid provider identifiers
VALID_PROVIDERS = ("ollama", "openai", "anthropic", "mock")

# Module-level cache, one instance per role
_llm_cache: dict[str, BaseChatModel] = {}


def clear_llm_cache() -> None:
    """Drop all cached LLM instances so they're recreated on next call."""
    _llm_cache.clear()


# ---------------------------------------------------------------------------
# Internal constructor (lazy imports to avoid hard dep on unused packages)
# ---------------------------------------------------------------------------

def _create_chat_model(
    provider: str,
    *,
    temperature: float,
    json_mode: bool = False,
) -> BaseChatModel:
    if provider == "ollama":
        from langchain_ollama import ChatOllama

        kwargs: dict = dict(
            base_url=settings.OLLAMA_BASE_URL,
            model=settings.OLLAMA_MODEL,
            temperature=temperature,
        )
        if json_mode:
            kwargs["format"] = "json"
        return ChatOllama(**kwargs)

    if provider == "openai":
        from langchain_openai import ChatOpenAI

        if not settings.OPENAI_API_KEY:
            raise ValueError("OPENAI_API_KEY is required when using the openai provider")
        kwargs = dict(
            model=settings.OPENAI_MODEL,
            temperature=temperature,
            api_key=settings.OPENAI_API_KEY,
            max_retries=settings.LLM_MAX_RETRIES,
        )
        if json_mode:
            kwargs["model_kwargs"] = {"response_format": {"type": "json_object"}}
        return ChatOpenAI(**kwargs)

    if provider == "anthropic":
        from langchain_anthropic import ChatAnthropic

        if not settings.ANTHROPIC_API_KEY:
            raise ValueError("ANTHROPIC_API_KEY is required when using the anthropic provider")
        return ChatAnthropic(
            model=settings.ANTHROPIC_MODEL,
            temperature=temperature,
            api_key=settings.ANTHROPIC_API_KEY,
            max_retries=settings.LLM_MAX_RETRIES,
        )

    if provider == "mock":
        from src.llm.mock import MockChatModel

        return MockChatModel()

    raise ValueError(f"Unknown provider: {provider!r}. Valid: {VALID_PROVIDERS}")


def _cached(key: str, temperature: float, json_mode: bool = False) -> BaseChatModel:
    if key not in _llm_cache:
        _llm_cache[key] = _create_chat_model(
            settings.LLM_PROVIDER,
            temperature=temperature,
            json_mode=json_mode,
        )
    return _llm_cache[key]


# ---------------------------------------------------------------------------
# Public factory functions
# ---------------------------------------------------------------------------

def get_drafting_llm() -> BaseChatModel:
    """Specification sections (JSON)."""
    return _cached("drafting", temperature=0.4, json_mode=True)


def get_claims_llm() -> BaseChatModel:
    """Numbered claims as plain text. Lower temperature for rule-compliant output."""
    return _cached("claims", temperature=0.3)


def get_intake_llm() -> BaseChatModel:
    """Invention extraction and dynamic question generation."""
    return _cached("intake", temperature=0.2, json_mode=True)


def get_quality_llm() -> BaseChatModel:
    """AI quality review of a finished draft."""
    return _cached("quality", temperature=0.2, json_mode=True)

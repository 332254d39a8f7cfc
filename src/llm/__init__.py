from src.llm.factory import (
    get_drafting_llm,
    get_claims_llm,
    get_intake_llm,
    get_quality_llm,
    clear_llm_cache,
)
from src.llm.client import GenerationResult, TokenUsageData, generate_text

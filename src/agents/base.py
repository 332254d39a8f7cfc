from typing import Any, Awaitable, Callable, Dict, Optional

from langchain_core.runnables import RunnableConfig

from src.llm.client import TokenUsageData

UsageCallback = Callable[[str, TokenUsageData], Awaitable[None]]


def configurable(config: Optional[RunnableConfig]) -> Dict[str, Any]:
    """
    The ``configurable`` mapping a caller passed to ``ainvoke``.
    Agents receive their side-effect hooks (usage logging, persistence) here
    rather than through graph state.
    """
    return (config or {}).get("configurable") or {}


async def report_usage(config: Optional[RunnableConfig], operation: str, usage: TokenUsageData) -> None:
    on_usage: Optional[UsageCallback] = configurable(config).get("on_usage")
    if on_usage is not None:
        await on_usage(operation, usage)

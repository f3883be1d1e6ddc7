"""One-shot entry point: answer a single query without keeping context."""

from __future__ import annotations

import logging
from typing import Any

from web3 import AsyncWeb3

from chain_ai_agent.config import AgentOptions
from chain_ai_agent.core.agent import ChainAiService
from chain_ai_agent.llm.base import BaseLLMProvider

logger = logging.getLogger("chain_ai_agent.services")


async def generate_response(
    query: str,
    options: AgentOptions,
    web3: AsyncWeb3 | None = None,
    provider: BaseLLMProvider | None = None,
) -> dict[str, Any]:
    """Run *query* through a fresh :class:`ChainAiService`.

    Returns ``{"action", "message", "object"}`` where ``object`` is the
    operation's data payload.
    """
    service = ChainAiService(options, web3=web3, provider=provider)
    try:
        result, _ = await service.process_command(query, [])
    except Exception as e:
        logger.error("[generate_response] error in process_command: %s", e)
        raise
    finally:
        await service.aclose()

    return {
        "action": result.action,
        "message": result.message,
        "object": result.data,
    }

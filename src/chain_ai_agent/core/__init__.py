"""Command dispatcher and one-shot entry point."""

from chain_ai_agent.core.agent import ChainAiService
from chain_ai_agent.core.services import generate_response

__all__ = ["ChainAiService", "generate_response"]

"""LLM provider abstraction layer for Chain AI Agent.

Provides a common set of data structures for chat messages, tool
definitions and tool calls, plus the OpenAI-backed provider that the
dispatcher uses to pick blockchain operations.
"""

from chain_ai_agent.llm.base import (
    BaseLLMProvider,
    LLMMessage,
    LLMResponse,
    ToolCall,
    ToolDefinition,
)
from chain_ai_agent.llm.openai import OpenAIProvider

__all__ = [
    "BaseLLMProvider",
    "LLMMessage",
    "LLMResponse",
    "OpenAIProvider",
    "ToolCall",
    "ToolDefinition",
]

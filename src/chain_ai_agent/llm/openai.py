"""OpenAI chat-completions provider with function calling."""

from __future__ import annotations

import json
import logging
from typing import Any

import openai

from chain_ai_agent.llm.base import (
    BaseLLMProvider,
    LLMMessage,
    LLMResponse,
    ToolCall,
    ToolDefinition,
)

logger = logging.getLogger("chain_ai_agent.llm.openai")


def _decode_arguments(name: str, raw: Any) -> dict[str, Any]:
    """Decode a tool call's JSON arguments; anything but an object becomes ``{}``."""
    try:
        arguments = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        logger.warning("[OpenAIProvider] unparseable arguments for %s: %r", name, raw)
        return {}
    return arguments if isinstance(arguments, dict) else {}


class OpenAIProvider(BaseLLMProvider):
    """Asks an OpenAI model which catalog function to call.

    The catalog is offered with ``tool_choice="auto"``, so the model may also
    answer in plain text.  ``base_url`` lets it target any OpenAI-compatible
    endpoint; ``client`` injects a ready ``AsyncOpenAI`` (used by tests).
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: str | None = None,
        max_tokens: int = 4096,
        client: openai.AsyncOpenAI | None = None,
    ):
        super().__init__(api_key=api_key, model=model, base_url=base_url, max_tokens=max_tokens)
        self._client = client or openai.AsyncOpenAI(api_key=self.api_key, base_url=self.base_url)

    @staticmethod
    def _function_spec(tool: ToolDefinition) -> dict:
        return {
            "type": "function",
            "function": {
                "name": tool.name,
                "description": tool.description,
                "parameters": tool.parameters,
            },
        }

    @staticmethod
    def _to_llm_response(completion) -> LLMResponse:
        choice = completion.choices[0]
        calls = [
            ToolCall(
                id=tc.id,
                name=tc.function.name,
                arguments=_decode_arguments(tc.function.name, tc.function.arguments),
            )
            for tc in choice.message.tool_calls or []
        ]
        usage = None
        if completion.usage:
            usage = {
                "input_tokens": completion.usage.prompt_tokens,
                "output_tokens": completion.usage.completion_tokens,
            }
        return LLMResponse(
            content=choice.message.content or "",
            tool_calls=calls or None,
            usage=usage,
            stop_reason=choice.finish_reason,
        )

    async def complete(
        self,
        messages: list[LLMMessage],
        tools: list[ToolDefinition] | None = None,
    ) -> LLMResponse:
        request: dict[str, Any] = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if tools:
            request["tools"] = [self._function_spec(t) for t in tools]
            request["tool_choice"] = "auto"

        try:
            completion = await self._client.chat.completions.create(**request)
        except Exception as exc:
            logger.error("[OpenAIProvider/complete] API call failed: %s", exc)
            raise

        return self._to_llm_response(completion)

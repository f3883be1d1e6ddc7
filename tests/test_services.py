"""Tests for the one-shot generate_response entry point."""

from __future__ import annotations

import pytest

from chain_ai_agent.core.services import generate_response
from chain_ai_agent.llm.base import LLMResponse, ToolCall

from .conftest import FakeProvider


async def test_generate_response_reshapes_result(options, web3):
    provider = FakeProvider([
        LLMResponse(tool_calls=[ToolCall(id="c1", name="getLatestBlock", arguments={})]),
    ])

    response = await generate_response("latest block?", options, web3=web3, provider=provider)

    assert response == {
        "action": "getLatestBlock",
        "message": "Latest block height: 1234",
        "object": {"blockHeight": 1234, "timestamp": "2023-11-14T22:13:20.000Z"},
    }
    # one-shot: only system prompt and the query were sent
    messages, _ = provider.calls[0]
    assert len(messages) == 2


async def test_generate_response_propagates_llm_errors(options, web3, caplog):
    class BrokenProvider(FakeProvider):
        async def complete(self, messages, tools=None):
            raise RuntimeError("invalid api key")

    with pytest.raises(RuntimeError, match="invalid api key"):
        await generate_response("x", options, web3=web3, provider=BrokenProvider([]))

    assert "[generate_response]" in caplog.text

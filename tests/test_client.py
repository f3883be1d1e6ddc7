"""Tests for the remote agent-service client."""

from __future__ import annotations

import json

import httpx
import pytest

from chain_ai_agent.client import (
    ClientError,
    ExplorerKeys,
    OpenAIKeys,
    QueryOptions,
    create_client,
    generate_query,
)


def _options() -> QueryOptions:
    return QueryOptions(
        open_ai=OpenAIKeys(api_key="sk-test", model="gpt-4o"),
        chain_id=388,
        explorer_keys=ExplorerKeys(cronos_zk_evm_key="zk-key"),
        custom_rpc="https://rpc.example",
    )


async def test_generate_query_posts_camel_case_payload():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(
            200,
            json={"action": "getLatestBlock", "message": "Latest block height: 9", "data": {"blockHeight": 9}},
        )

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        client = create_client(_options(), url="http://agent/query", http_client=http)
        response = await client.agent.generate_query("latest block")

    body = json.loads(seen[0].content)
    assert seen[0].method == "POST"
    assert body["query"] == "latest block"
    assert body["options"]["openAI"] == {"apiKey": "sk-test", "model": "gpt-4o"}
    assert body["options"]["chainId"] == 388
    assert body["options"]["explorerKeys"]["cronosZkEvmKey"] == "zk-key"
    assert body["options"]["customRPC"] == "https://rpc.example"
    assert "signerAppUrl" not in body["options"]

    assert response.action == "getLatestBlock"
    assert response.data == {"blockHeight": 9}


async def test_http_error_raises_client_error():
    transport = httpx.MockTransport(lambda request: httpx.Response(500, json={"status": "Failed"}))

    async with httpx.AsyncClient(transport=transport) as http:
        with pytest.raises(ClientError) as exc:
            await generate_query("x", _options(), url="http://agent/query", http_client=http)

    assert str(exc.value) == "Failed to generate response: HTTP error! status: 500"


async def test_transport_error_raises_client_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as http:
        with pytest.raises(ClientError, match="Failed to generate response: connection refused"):
            await generate_query("x", _options(), url="http://agent/query", http_client=http)


def test_explorer_key_by_chain_id():
    keys = ExplorerKeys(cronos_mainnet_key="main", cronos_zk_evm_testnet_key="zkt")
    assert keys.for_chain(25) == "main"
    assert keys.for_chain(282) == "zkt"
    assert keys.for_chain(388) == ""
    assert keys.for_chain(1) == ""


def test_query_options_accept_wire_names():
    options = QueryOptions.model_validate({
        "openAI": {"apiKey": "k", "model": "gpt-4"},
        "chainId": 282,
        "customRPC": "http://rpc",
    })
    assert options.open_ai.api_key == "k"
    assert options.chain_id == 282
    assert options.custom_rpc == "http://rpc"

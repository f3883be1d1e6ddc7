"""HTTP client for a remote Chain AI agent service.

Usage::

    client = create_client(QueryOptions(open_ai=OpenAIKeys(api_key="sk-..."), chain_id=388))
    response = await client.agent.generate_query("What is the latest block?")
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

logger = logging.getLogger("chain_ai_agent.client")

DEFAULT_SERVICE_URL = "http://localhost:8000/api/v1/cdc-ai-agent-service/query"


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OpenAIKeys(_CamelModel):
    api_key: str = ""
    model: str = "gpt-4o"


class ExplorerKeys(_CamelModel):
    cronos_mainnet_key: str = ""
    cronos_testnet_key: str = ""
    cronos_zk_evm_key: str = ""
    cronos_zk_evm_testnet_key: str = ""

    def for_chain(self, chain_id: int) -> str:
        """Pick the key matching *chain_id* (empty string if none)."""
        return {
            25: self.cronos_mainnet_key,
            338: self.cronos_testnet_key,
            388: self.cronos_zk_evm_key,
            282: self.cronos_zk_evm_testnet_key,
        }.get(chain_id, "")


class QueryOptions(_CamelModel):
    """Options sent along with every query to the agent service."""

    open_ai: OpenAIKeys = Field(default_factory=OpenAIKeys, alias="openAI")
    chain_id: int = 25
    explorer_keys: ExplorerKeys = Field(default_factory=ExplorerKeys)
    signer_app_url: Optional[str] = None
    custom_rpc: Optional[str] = Field(default=None, alias="customRPC")


class AgentResponse(BaseModel):
    action: str = ""
    message: str = ""
    data: Any = Field(default_factory=dict)


class ClientError(Exception):
    """Raised when the agent service can't produce a response."""

    def __init__(self, message: str, agent_response: AgentResponse | None = None):
        super().__init__(message)
        self.data = agent_response


async def generate_query(
    query: str,
    options: QueryOptions,
    url: str = DEFAULT_SERVICE_URL,
    http_client: httpx.AsyncClient | None = None,
) -> AgentResponse:
    """POST *query* and *options* to the agent service and return its answer."""
    payload = {
        "query": query,
        "options": options.model_dump(by_alias=True, exclude_none=True),
    }
    client = http_client or httpx.AsyncClient(timeout=120)
    try:
        resp = await client.post(url, json=payload)
        if resp.is_error:
            raise ClientError(f"HTTP error! status: {resp.status_code}")
        return AgentResponse.model_validate(resp.json())
    except (ClientError, httpx.HTTPError, ValueError) as e:
        logger.error("[client/generate_query] - %s", e)
        raise ClientError(f"Failed to generate response: {e}") from e
    finally:
        if http_client is None:
            await client.aclose()


class _AgentNamespace:
    def __init__(self, options: QueryOptions, url: str, http_client: httpx.AsyncClient | None):
        self._options = options
        self._url = url
        self._http_client = http_client

    async def generate_query(self, query: str) -> AgentResponse:
        return await generate_query(query, self._options, self._url, self._http_client)


class AgentClient:
    """Client bound to one set of :class:`QueryOptions`."""

    def __init__(
        self,
        options: QueryOptions,
        url: str = DEFAULT_SERVICE_URL,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.options = options
        self.agent = _AgentNamespace(options, url, http_client)


def create_client(
    options: QueryOptions,
    url: str = DEFAULT_SERVICE_URL,
    http_client: httpx.AsyncClient | None = None,
) -> AgentClient:
    return AgentClient(options, url=url, http_client=http_client)

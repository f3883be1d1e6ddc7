"""Async client for the Cronos explorer REST API using httpx."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from chain_ai_agent.blockchain.chains import get_base_url
from chain_ai_agent.explorer.models import (
    Block,
    ExplorerResponse,
    Transaction,
    TransactionStatus,
)

logger = logging.getLogger("chain_ai_agent.explorer")


class ExplorerApi:
    """Thin wrapper over the explorer endpoints the agent uses.

    Parameters
    ----------
    api_key:
        Explorer API key, sent as the ``apikey`` query parameter.
    chain_name:
        One of the supported chain types; selects the base URL.
    http_client:
        Optional pre-built ``httpx.AsyncClient`` (e.g. with a mock transport).
        When omitted the explorer owns a client and closes it in
        :meth:`aclose`.
    """

    def __init__(
        self,
        api_key: str,
        chain_name: str,
        http_client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.base_url = get_base_url(chain_name)
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    async def __aenter__(self) -> ExplorerApi:
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        query = {**params, "apikey": self.api_key}
        resp = await self._client.get(f"{self.base_url}{path}", params=query)
        resp.raise_for_status()
        return resp.json()

    async def get_transactions_by_address(
        self, address: str, session: str = "", limit: int = 20
    ) -> ExplorerResponse[list[Transaction]]:
        """Fetch one page of transactions for *address*."""
        try:
            payload = await self._get(
                "/api/v1/account/getTxsByAddress",
                {"address": address, "session": session, "limit": limit},
            )
            return ExplorerResponse[list[Transaction]].model_validate(payload)
        except Exception as e:
            logger.error("[ExplorerApi/get_transactions_by_address] error: %s", e)
            raise

    async def get_contract_abi(self, address: str) -> ExplorerResponse[str]:
        """Fetch the ABI (JSON string) of a verified contract."""
        try:
            payload = await self._get("/api/v1/contract/getAbi", {"address": address})
            return ExplorerResponse[str].model_validate(payload)
        except Exception as e:
            logger.error("[ExplorerApi/get_contract_abi] error: %s", e)
            raise

    async def get_transaction_by_hash(self, tx_hash: str) -> ExplorerResponse[Transaction]:
        try:
            payload = await self._get(
                "/api/v1/ethproxy/getTransactionByHash", {"txHash": tx_hash}
            )
            return ExplorerResponse[Transaction].model_validate(payload)
        except Exception as e:
            logger.error("[ExplorerApi/get_transaction_by_hash] error: %s", e)
            raise

    async def get_block_by_number(self, tag: str, tx_detail: bool = False) -> ExplorerResponse[Block]:
        """Fetch a block by hex number or tag (``latest``, ``earliest``, ``pending``)."""
        try:
            payload = await self._get(
                "/api/v1/ethproxy/getBlockByNumber",
                # httpx would send Python's "True"/"False"
                {"tag": tag, "txDetail": "true" if tx_detail else "false"},
            )
            return ExplorerResponse[Block].model_validate(payload)
        except Exception as e:
            logger.error("[ExplorerApi/get_block_by_number] error: %s", e)
            raise

    async def get_status(self, tx_hash: str) -> ExplorerResponse[TransactionStatus]:
        try:
            payload = await self._get("/api/v1/transaction/getStatus", {"txHash": tx_hash})
            return ExplorerResponse[TransactionStatus].model_validate(payload)
        except Exception as e:
            logger.error("[ExplorerApi/get_status] error: %s", e)
            raise

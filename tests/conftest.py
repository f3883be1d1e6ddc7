"""
Pytest fixtures for Chain AI Agent tests.

Web3, the explorer API and the LLM are all faked; HD derivation runs for
real against the well-known Hardhat test mnemonic.
"""

from __future__ import annotations

from typing import Callable

import httpx
import pytest

from chain_ai_agent.blockchain.wallets import WalletContext
from chain_ai_agent.config import AgentOptions, ChainConfig, ExplorerConfig, OpenAIConfig, WalletConfig
from chain_ai_agent.explorer.client import ExplorerApi
from chain_ai_agent.llm.base import BaseLLMProvider, LLMResponse

TEST_MNEMONIC = "test test test test test test test test test test test junk"
ACCOUNT_0 = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
ACCOUNT_1 = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
ACCOUNT_2 = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"


class FakeEth:
    """Async stand-in for ``AsyncWeb3.eth``."""

    def __init__(self):
        self.balances: dict[str, int] = {}
        self.block = {"number": 1234, "timestamp": 1700000000, "baseFeePerGas": 10**9}
        self.nonce = 7
        self.legacy_gas_price = 5 * 10**9
        self.sent: list[bytes] = []
        self.estimated: list[dict] = []

    async def get_balance(self, address):
        if address not in self.balances:
            raise ValueError("execution reverted")
        return self.balances[address]

    async def get_block(self, tag):
        return self.block

    async def get_transaction_count(self, address):
        return self.nonce

    async def estimate_gas(self, tx):
        self.estimated.append(dict(tx))
        return 21000

    @property
    def gas_price(self):
        async def _gas_price():
            return self.legacy_gas_price

        return _gas_price()

    async def send_raw_transaction(self, raw):
        self.sent.append(bytes(raw))
        return b"\xab" * 32

    async def wait_for_transaction_receipt(self, tx_hash):
        return {"blockNumber": 1235, "transactionHash": tx_hash}


class FakeWeb3:
    def __init__(self):
        self.eth = FakeEth()


class FakeProvider(BaseLLMProvider):
    """Replays canned responses and records what it was asked."""

    def __init__(self, responses: list[LLMResponse]):
        super().__init__(api_key="test", model="fake-model")
        self.responses = list(responses)
        self.calls: list[tuple[list, list | None]] = []

    async def complete(self, messages, tools=None):
        self.calls.append((list(messages), tools))
        return self.responses.pop(0)


@pytest.fixture
def options() -> AgentOptions:
    return AgentOptions(
        openai=OpenAIConfig(api_key="sk-test"),
        chain=ChainConfig(id=25, name="cronos-evm", rpc="http://localhost:8545"),
        explorer=ExplorerConfig(api_key="explorer-key"),
        wallet=WalletConfig(mnemonic=TEST_MNEMONIC),
    )


@pytest.fixture
def web3() -> FakeWeb3:
    return FakeWeb3()


@pytest.fixture
def wallet_context() -> WalletContext:
    return WalletContext()


@pytest.fixture
def make_explorer() -> Callable[[Callable[[httpx.Request], httpx.Response]], ExplorerApi]:
    """Build an ExplorerApi whose HTTP calls go to *handler*."""

    def _make(handler):
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return ExplorerApi("explorer-key", "cronos-evm", http_client=client)

    return _make

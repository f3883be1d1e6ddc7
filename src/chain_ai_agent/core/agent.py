"""ChainAiService - turns user commands into blockchain operations."""

from __future__ import annotations

import inspect
import logging
from typing import Any

from web3 import AsyncWeb3

from chain_ai_agent.blockchain.models import CommandResult, FunctionResponse
from chain_ai_agent.blockchain.provider import get_web3
from chain_ai_agent.blockchain.service import BlockchainService
from chain_ai_agent.blockchain.wallets import WalletContext
from chain_ai_agent.catalog import SYSTEM_PROMPT, TOOLS, BlockchainFunction
from chain_ai_agent.config import AgentOptions
from chain_ai_agent.explorer.client import ExplorerApi
from chain_ai_agent.llm.base import BaseLLMProvider, LLMMessage
from chain_ai_agent.llm.openai import OpenAIProvider

logger = logging.getLogger("chain_ai_agent.agent")

MAX_CONTEXT_MESSAGES = 10


def _require(args: dict[str, Any], key: str) -> Any:
    if args.get(key) is None:
        raise ValueError(f"Missing required argument '{key}'")
    return args[key]


def _as_list(value: Any) -> list[Any]:
    """Models sometimes send a lone string where an array is declared."""
    if isinstance(value, str):
        return [value]
    return list(value)


class ChainAiService:
    """Asks the model which catalog function to call and runs it.

    Holds the LLM provider, the Web3 connection, the explorer client and the
    wallet-index counters for one conversation.
    """

    def __init__(
        self,
        options: AgentOptions,
        web3: AsyncWeb3 | None = None,
        provider: BaseLLMProvider | None = None,
        explorer: ExplorerApi | None = None,
    ):
        self.options = options
        self.web3 = web3 or get_web3(options.chain.rpc, options.chain.id)
        self.provider = provider or OpenAIProvider(
            api_key=options.openai.api_key,
            model=options.openai.model,
            base_url=options.openai.base_url,
            max_tokens=options.openai.max_tokens,
        )
        self.explorer = explorer or ExplorerApi(
            options.explorer.api_key,
            options.chain.name,
            timeout=options.explorer.timeout,
        )
        self.wallet_context = WalletContext()

    async def aclose(self) -> None:
        await self.explorer.aclose()

    async def process_command(
        self, command: str, context: list[LLMMessage]
    ) -> tuple[CommandResult, list[LLMMessage]]:
        """Process one user command.

        Returns the merged result of every tool call the model made (or its
        plain reply when it made none) together with the updated context.
        """
        messages = [
            LLMMessage(role="system", content=SYSTEM_PROMPT),
            *context,
            LLMMessage(role="user", content=command),
        ]

        response = await self.provider.complete(messages=messages, tools=TOOLS)
        result = CommandResult()

        if response.tool_calls:
            for tc in response.tool_calls:
                function_result = await self.execute_function(tc.name, tc.arguments)
                result.merge(function_result)
        else:
            result.message = response.content

        context = self.update_context(context, command, result.message)
        return result, context

    async def execute_function(self, function_name: str, function_args: dict[str, Any]) -> FunctionResponse:
        """Run the catalog function *function_name*; never raises."""
        logger.info("calling function: %s(%s)", function_name, function_args)
        service = BlockchainService(self.options, self.web3, self.wallet_context, self.explorer)

        try:
            call = self._resolve(service, function_name, function_args)
            if call is None:
                return FunctionResponse.failed(f"Unknown function: {function_name}")
            result = call()
            if inspect.isawaitable(result):
                result = await result
            return result
        except Exception as e:
            logger.error(
                "[ChainAiService/execute_function] error executing function %s: %s",
                function_name,
                e,
            )
            return FunctionResponse.failed(f"Failed to execute {function_name}: {e}")

    @staticmethod
    def _resolve(service: BlockchainService, name: str, args: dict[str, Any]):
        """Bind catalog arguments to the matching service method."""
        if name == BlockchainFunction.SEND_TRANSACTION:
            return lambda: service.send_transaction(_require(args, "to_address"), _require(args, "amount"))
        if name == BlockchainFunction.LIST_WALLETS:
            return service.list_wallets
        if name == BlockchainFunction.GET_BALANCE:
            return lambda: service.get_balance(_as_list(_require(args, "walletAddresses")))
        if name == BlockchainFunction.GET_LATEST_BLOCK:
            return service.get_latest_block
        if name == BlockchainFunction.GET_TRANSACTIONS_BY_ADDRESS:
            return lambda: service.get_transactions_by_address(
                _require(args, "address"),
                args.get("session") or "",
                int(args.get("limit") or 20),
            )
        if name == BlockchainFunction.GET_CONTRACT_ABI:
            return lambda: service.get_contract_abi(_require(args, "address"))
        if name == BlockchainFunction.GET_TRANSACTION_BY_HASH:
            return lambda: service.get_transaction_by_hash(_require(args, "txHash"))
        if name == BlockchainFunction.GET_BLOCKS_BY_NUMBER:
            return lambda: service.get_blocks_by_number(
                _as_list(_require(args, "blockNumbers")),
                bool(args.get("txDetail", False)),
            )
        if name == BlockchainFunction.GET_TRANSACTION_STATUS:
            return lambda: service.get_transaction_status(_require(args, "txHash"))
        if name == BlockchainFunction.CREATE_WALLET:
            return service.create_wallet
        return None

    @staticmethod
    def update_context(
        context: list[LLMMessage], command: str, response: str
    ) -> list[LLMMessage]:
        """Append the exchange and keep only the most recent messages."""
        context.append(LLMMessage(role="user", content=command))
        context.append(LLMMessage(role="assistant", content=response))
        if len(context) > MAX_CONTEXT_MESSAGES:
            del context[:-MAX_CONTEXT_MESSAGES]
        return context

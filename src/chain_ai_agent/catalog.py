"""Function-schema catalog offered to the model.

Every blockchain operation the dispatcher can run is listed here with a
description and a JSON Schema for its arguments. Argument names are the
wire names the model produces; the dispatcher maps them onto service calls.
"""

from __future__ import annotations

from enum import Enum

from chain_ai_agent.llm.base import ToolDefinition


class BlockchainFunction(str, Enum):
    SEND_TRANSACTION = "sendTransaction"
    LIST_WALLETS = "listWallets"
    GET_BALANCE = "getBalance"
    GET_LATEST_BLOCK = "getLatestBlock"
    GET_TRANSACTIONS_BY_ADDRESS = "getTransactionsByAddress"
    GET_CONTRACT_ABI = "getContractABI"
    GET_TRANSACTION_BY_HASH = "getTransactionByHash"
    GET_BLOCKS_BY_NUMBER = "getBlocksByNumber"
    GET_TRANSACTION_STATUS = "getTransactionStatus"
    CREATE_WALLET = "createWallet"


SYSTEM_PROMPT = (
    "You are an AI assistant that helps users interact with Ethereum and Cronos "
    "blockchains. You can use multiple functions if needed to fulfill the user's request."
)

_NO_PARAMETERS = {"type": "object", "properties": {}}

SEND_TRANSACTION_PARAMETERS = {
    "type": "object",
    "properties": {
        "to_address": {"type": "string", "description": "Recipient's Ethereum address"},
        "amount": {"type": "number", "description": "Amount of Ether to send"},
    },
    "required": ["to_address", "amount"],
}

GET_BALANCE_PARAMETERS = {
    "type": "object",
    "properties": {
        "walletAddresses": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of Ethereum addresses to check balances",
        },
    },
    "required": ["walletAddresses"],
}

GET_TRANSACTIONS_BY_ADDRESS_PARAMETERS = {
    "type": "object",
    "properties": {
        "address": {
            "type": "string",
            "description": "Cronos address to get transactions for",
        },
        "session": {
            "type": "string",
            "description": "Previous page session. Leave empty for first page",
        },
        "limit": {
            "type": "number",
            "description": "Page size (max 100)",
            "minimum": 1,
            "maximum": 100,
            "default": 20,
        },
    },
    "required": ["address"],
}

GET_CONTRACT_ABI_PARAMETERS = {
    "type": "object",
    "properties": {
        "address": {"type": "string", "description": "Contract address to get ABI for"},
    },
    "required": ["address"],
}

GET_TRANSACTION_BY_HASH_PARAMETERS = {
    "type": "object",
    "properties": {
        "txHash": {"type": "string", "description": "Transaction hash to get details for"},
    },
    "required": ["txHash"],
}

GET_BLOCKS_BY_NUMBER_PARAMETERS = {
    "type": "object",
    "properties": {
        "blockNumbers": {
            "type": "array",
            "items": {"type": "string"},
            "description": "List of block numbers in hex, or 'earliest', 'latest', or 'pending'",
        },
        "txDetail": {
            "type": "boolean",
            "description": "If true, returns full transaction objects; if false, only transaction hashes",
            "default": False,
        },
    },
    "required": ["blockNumbers"],
}

GET_TRANSACTION_STATUS_PARAMETERS = {
    "type": "object",
    "properties": {
        "txHash": {"type": "string", "description": "Transaction hash to get status for"},
    },
    "required": ["txHash"],
}


TOOLS: list[ToolDefinition] = [
    ToolDefinition(
        name=BlockchainFunction.SEND_TRANSACTION.value,
        description="Send an Ethereum transaction from the current wallet",
        parameters=SEND_TRANSACTION_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.LIST_WALLETS.value,
        description="List all created wallets using MYMNEMONICS",
        parameters=_NO_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.GET_BALANCE.value,
        description="Get the current balance of specified Ethereum addresses",
        parameters=GET_BALANCE_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.GET_LATEST_BLOCK.value,
        description="Get the latest block height from the Cronos blockchain",
        parameters=_NO_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.GET_TRANSACTIONS_BY_ADDRESS.value,
        description="Get the list of transactions for a specified Cronos address",
        parameters=GET_TRANSACTIONS_BY_ADDRESS_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.GET_CONTRACT_ABI.value,
        description="Get the ABI of a verified smart contract",
        parameters=GET_CONTRACT_ABI_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.GET_TRANSACTION_BY_HASH.value,
        description="Get the details of a transaction by its hash",
        parameters=GET_TRANSACTION_BY_HASH_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.GET_BLOCKS_BY_NUMBER.value,
        description="Get information about blocks by its numbers",
        parameters=GET_BLOCKS_BY_NUMBER_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.GET_TRANSACTION_STATUS.value,
        description="Get the status of a transaction by its hash",
        parameters=GET_TRANSACTION_STATUS_PARAMETERS,
    ),
    ToolDefinition(
        name=BlockchainFunction.CREATE_WALLET.value,
        description="Create a new random wallet",
        parameters=_NO_PARAMETERS,
    ),
]


def get_tool(name: str) -> ToolDefinition | None:
    """Look up a catalog entry by function name."""
    for tool in TOOLS:
        if tool.name == name:
            return tool
    return None

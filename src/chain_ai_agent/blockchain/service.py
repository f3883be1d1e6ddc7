"""Blockchain operations backing each catalog function.

Each public method returns a :class:`FunctionResponse` on success and raises
:class:`BlockchainError` describing the failed step otherwise. Node reads go
through ``AsyncWeb3``; history, ABI, block and status lookups go through the
explorer API.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any

from web3 import AsyncWeb3, Web3

from chain_ai_agent.blockchain.models import BlockchainError, FunctionResponse, Status
from chain_ai_agent.blockchain.wallets import WalletContext, derive_account
from chain_ai_agent.catalog import BlockchainFunction
from chain_ai_agent.config import AgentOptions
from chain_ai_agent.explorer.client import ExplorerApi
from chain_ai_agent.explorer.models import TransactionAddress

logger = logging.getLogger("chain_ai_agent.blockchain.service")

BLOCK_TAGS = ("earliest", "latest", "pending")

# Priority tip used when the chain supports EIP-1559
_MAX_PRIORITY_FEE_GWEI = 1.5


def _to_int(value: Any) -> int:
    """Parse an int from a hex string, decimal string or number."""
    if value is None:
        return 0
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.lower().startswith("0x"):
        return int(text, 16)
    return int(text)


def _format_units(value: int, unit: str) -> str:
    """Render *value* wei in *unit*, keeping at least one decimal ("1.0", "0.5")."""
    text = format(Decimal(Web3.from_wei(value, unit)), "f")
    return text if "." in text else f"{text}.0"


def _address_to_wire(value: TransactionAddress | str | None) -> dict[str, Any] | str | None:
    if isinstance(value, TransactionAddress):
        return value.to_wire()
    return value


def normalize_block_tag(block: str) -> str:
    """Turn a decimal block number into a hex tag; pass hex and named tags through."""
    block = str(block).strip()
    if block.startswith("0x") or block in BLOCK_TAGS:
        return block
    return hex(int(block))


def _iso_timestamp(seconds: int) -> str:
    dt = datetime.fromtimestamp(seconds, tz=timezone.utc)
    return dt.isoformat(timespec="milliseconds").replace("+00:00", "Z")


class BlockchainService:
    """Runs catalog operations against one chain.

    Parameters
    ----------
    options:
        Agent options; supplies the chain id and wallet mnemonic.
    web3:
        Connected ``AsyncWeb3`` for the configured chain.
    context:
        Wallet-index counters, shared across services of one dispatcher.
    explorer:
        Explorer API client for the configured chain.
    """

    def __init__(
        self,
        options: AgentOptions,
        web3: AsyncWeb3,
        context: WalletContext,
        explorer: ExplorerApi,
    ):
        self.options = options
        self.w3 = web3
        self.context = context
        self.explorer = explorer

    # ------------------------------------------------------------------
    # Wallet operations
    # ------------------------------------------------------------------

    async def send_transaction(self, to_address: str, amount: float | str) -> FunctionResponse:
        """Send *amount* of the native token from the current wallet and wait for the receipt."""
        index = self.context.current_wallet_index
        try:
            account = derive_account(self.options.wallet.mnemonic, index)
            from_address = account.address
            nonce = await self.w3.eth.get_transaction_count(from_address)
            value = Web3.to_wei(Decimal(str(amount)), "ether")

            tx: dict[str, Any] = {
                "from": from_address,
                "to": Web3.to_checksum_address(to_address),
                "value": value,
                "nonce": nonce,
                "chainId": self.options.chain.id,
            }

            latest = await self.w3.eth.get_block("latest")
            base_fee = latest.get("baseFeePerGas")
            if base_fee is not None:
                max_priority = Web3.to_wei(_MAX_PRIORITY_FEE_GWEI, "gwei")
                tx["maxFeePerGas"] = base_fee * 2 + max_priority
                tx["maxPriorityFeePerGas"] = max_priority
            else:
                tx["gasPrice"] = await self.w3.eth.gas_price
            tx["gas"] = await self.w3.eth.estimate_gas(tx)

            signed = account.sign_transaction(tx)
            tx_hash = await self.w3.eth.send_raw_transaction(signed.raw_transaction)
            receipt = await self.w3.eth.wait_for_transaction_receipt(tx_hash)
            if not receipt:
                raise BlockchainError("No transaction receipt found.")
        except Exception as e:
            raise BlockchainError(f"Error sending transaction: {e}") from e

        block_number = receipt["blockNumber"]
        receipt_hash = Web3.to_hex(receipt["transactionHash"])
        logger.info("Sent %s from wallet %d to %s: %s", amount, index, to_address, receipt_hash)
        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.SEND_TRANSACTION.value,
            message=(
                f"Transaction sent from wallet {index} ({from_address}) and confirmed "
                f"in block {block_number}. Hash: {receipt_hash}"
            ),
            data={
                "walletIndex": index,
                "fromAddress": from_address,
                "blockNumber": block_number,
                "transactionHash": receipt_hash,
            },
        )

    def list_wallets(self) -> FunctionResponse:
        """List every wallet derived so far (indices ``0..wallet_max_account``)."""
        try:
            mnemonic = self.options.wallet.mnemonic
            wallets = [
                {"walletNumber": i, "address": derive_account(mnemonic, i).address}
                for i in range(self.context.wallet_max_account + 1)
            ]
            current = self.context.current_wallet_index
            current_address = wallets[current]["address"]
        except Exception as e:
            raise BlockchainError(f"Error fetching wallets: {e}") from e

        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.LIST_WALLETS.value,
            message=f"Listed {len(wallets)} wallets. Current wallet: {current} - {current_address}",
            data={
                "wallets": wallets,
                "currentWallet": {"index": current, "address": current_address},
            },
        )

    def create_wallet(self) -> FunctionResponse:
        """Derive the next wallet index from the mnemonic."""
        index = self.context.wallet_max_account + 1
        try:
            account = derive_account(self.options.wallet.mnemonic, index)
        except Exception as e:
            raise BlockchainError(f"Error creating wallet: {e}") from e
        self.context.wallet_max_account = index

        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.CREATE_WALLET.value,
            message=f"New wallet created: {account.address} (index: {index})",
            data={"newWallet": {"index": index, "address": account.address}},
        )

    async def get_balance(self, wallet_addresses: list[str]) -> FunctionResponse:
        """Look up native balances in parallel. Per-address errors don't fail the call."""

        async def _one(address: str) -> dict[str, Any]:
            try:
                balance = await self.w3.eth.get_balance(Web3.to_checksum_address(address))
                return {
                    "address": address,
                    "balanceWei": str(balance),
                    "balanceEth": _format_units(balance, "ether"),
                }
            except Exception as e:
                logger.warning("Failed to get balance for %s: %s", address, e)
                return {"address": address, "error": f"Error getting balance: {e}"}

        try:
            balances = await asyncio.gather(*(_one(a) for a in wallet_addresses))
        except Exception as e:
            raise BlockchainError(f"Error fetching balances: {e}") from e

        summary = ", ".join(
            f"{b['address']}: {b['error']}" if "error" in b else f"{b['address']}: {b['balanceEth']} ETH"
            for b in balances
        )
        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.GET_BALANCE.value,
            message=f"Balances: {summary}",
            data={"balances": list(balances)},
        )

    # ------------------------------------------------------------------
    # Chain reads
    # ------------------------------------------------------------------

    async def get_latest_block(self) -> FunctionResponse:
        try:
            block = await self.w3.eth.get_block("latest")
            if not block:
                raise BlockchainError("No Block found.")
        except Exception as e:
            raise BlockchainError(f"Error fetching the latest block: {e}") from e

        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.GET_LATEST_BLOCK.value,
            message=f"Latest block height: {block['number']}",
            data={
                "blockHeight": block["number"],
                "timestamp": _iso_timestamp(block["timestamp"]),
            },
        )

    async def get_transactions_by_address(
        self, address: str, session: str = "", limit: int = 20
    ) -> FunctionResponse:
        try:
            response = await self.explorer.get_transactions_by_address(address, session, limit)
            if response.result is None:
                raise BlockchainError("No transactions found.")
        except Exception as e:
            raise BlockchainError(f"Error fetching transactions: {e}") from e

        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.GET_TRANSACTIONS_BY_ADDRESS.value,
            message=f"Retrieved {len(response.result)} transactions for {address}",
            data={
                "transactions": [tx.to_wire() for tx in response.result],
                "pagination": response.pagination.to_wire() if response.pagination else None,
            },
        )

    async def get_contract_abi(self, address: str) -> FunctionResponse:
        try:
            response = await self.explorer.get_contract_abi(address)
            if not response.result:
                raise BlockchainError("No Contract ABI found.")
        except Exception as e:
            raise BlockchainError(f"Error fetching contract ABI: {e}") from e

        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.GET_CONTRACT_ABI.value,
            message=f"Fetched ABI for contract at {address}",
            data={"abi": response.result},
        )

    async def get_transaction_by_hash(self, tx_hash: str) -> FunctionResponse:
        try:
            response = await self.explorer.get_transaction_by_hash(tx_hash)
            tx = response.result
            if tx is None:
                raise BlockchainError("No transaction found.")
            data = {
                "blockNumber": _to_int(tx.block_number),
                "from": _address_to_wire(tx.from_),
                "to": _address_to_wire(tx.to),
                "value": _format_units(_to_int(tx.value), "ether"),
                "gasPrice": _format_units(_to_int(tx.gas_price), "gwei"),
                "nonce": _to_int(tx.nonce),
                "transactionIndex": _to_int(tx.transaction_index),
                "gas": _to_int(tx.gas),
            }
        except Exception as e:
            raise BlockchainError(f"Error fetching transaction: {e}") from e

        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.GET_TRANSACTION_BY_HASH.value,
            message=f"Retrieved details for transaction {tx_hash}",
            data=data,
        )

    async def get_blocks_by_number(
        self, block_numbers: list[str], tx_detail: bool = False
    ) -> FunctionResponse:
        """Fetch several blocks in parallel; any missing block fails the call."""

        async def _one(block: str) -> dict[str, Any]:
            response = await self.explorer.get_block_by_number(normalize_block_tag(block), tx_detail)
            if response.result is None:
                raise BlockchainError(f"No block found for {block}.")
            return response.result.to_wire()

        try:
            blocks = await asyncio.gather(*(_one(b) for b in block_numbers))
        except Exception as e:
            raise BlockchainError(f"Error fetching blocks: {e}") from e

        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.GET_BLOCKS_BY_NUMBER.value,
            message=f"Retrieved information for {len(blocks)} blocks",
            data={"blocks": list(blocks)},
        )

    async def get_transaction_status(self, tx_hash: str) -> FunctionResponse:
        try:
            response = await self.explorer.get_status(tx_hash)
            result = response.result
            if result is None:
                raise BlockchainError("No transaction status found.")
        except Exception as e:
            raise BlockchainError(f"Error fetching transaction status: {e}") from e

        outcome = Status.SUCCESS if result.status == 1 else Status.FAILED
        return FunctionResponse(
            status=Status.SUCCESS,
            action=BlockchainFunction.GET_TRANSACTION_STATUS.value,
            message=f"Transaction status: {outcome.value}",
            data={
                "statusCode": result.status,
                "isError": result.is_error,
                "errorDescription": result.err_description or "N/A",
            },
        )

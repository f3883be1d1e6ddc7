"""Cronos explorer REST client and response models."""

from chain_ai_agent.explorer.client import ExplorerApi
from chain_ai_agent.explorer.models import (
    Block,
    ExplorerResponse,
    Pagination,
    Transaction,
    TransactionAddress,
    TransactionStatus,
)

__all__ = [
    "Block",
    "ExplorerApi",
    "ExplorerResponse",
    "Pagination",
    "Transaction",
    "TransactionAddress",
    "TransactionStatus",
]

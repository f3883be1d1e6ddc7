"""Pydantic models mirroring the Cronos explorer REST responses.

Field names are snake_case in Python and camelCase on the wire. Unknown
fields are preserved so responses survive contract additions.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class ExplorerModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Dump with wire (camelCase) names, dropping unset optionals."""
        return self.model_dump(by_alias=True, exclude_none=True)


class Pagination(ExplorerModel):
    total_record: int = 0
    total_page: int = 0
    current_page: int = 0
    limit: int = 0
    session: str = ""


class ExplorerResponse(ExplorerModel, Generic[T]):
    """Envelope every explorer endpoint answers with."""

    status: str = ""
    message: str = ""
    result: Optional[T] = None
    pagination: Optional[Pagination] = None


class TransactionAddress(ExplorerModel):
    address: str
    is_contract: bool = False


class Transaction(ExplorerModel):
    block_number: Optional[Union[int, str]] = None
    transaction_hash: Optional[str] = None
    status: Optional[int] = None
    error: Optional[str] = None
    from_: Optional[Union[TransactionAddress, str]] = Field(default=None, alias="from")
    to: Optional[Union[TransactionAddress, str]] = None
    gas: Optional[Union[int, str]] = None
    gas_price: Optional[Union[int, str]] = None
    gas_limit: Optional[Union[int, str]] = None
    timestamp: Optional[int] = None
    method_id: Optional[str] = None
    method_name: Optional[str] = None
    index: Optional[int] = None
    value: Optional[Union[int, str]] = None
    type: Optional[Union[int, str]] = None
    nonce: Optional[Union[int, str]] = None
    input: Optional[str] = None
    contract_address: Optional[str] = None
    confirmations: Optional[int] = None
    transaction_index: Optional[Union[int, str]] = None


class Block(ExplorerModel):
    number: Optional[str] = None
    hash: Optional[str] = None
    parent_hash: Optional[str] = None
    miner: Optional[str] = None
    timestamp: Optional[str] = None
    gas_used: Optional[str] = None
    gas_limit: Optional[str] = None
    base_fee_per_gas: Optional[str] = None
    size: Optional[str] = None
    nonce: Optional[str] = None
    difficulty: Optional[str] = None
    total_difficulty: Optional[str] = None
    extra_data: Optional[str] = None
    logs_bloom: Optional[str] = None
    mix_hash: Optional[str] = None
    state_root: Optional[str] = None
    transactions_root: Optional[str] = None
    receipts_root: Optional[str] = None
    sha3_uncles: Optional[str] = None
    l1_batch_number: Optional[str] = None
    l1_batch_timestamp: Optional[str] = None
    seal_fields: list[str] = Field(default_factory=list)
    uncles: list[str] = Field(default_factory=list)
    transactions: list[Union[str, dict[str, Any]]] = Field(default_factory=list)


class TransactionStatus(ExplorerModel):
    status: int = 0
    is_error: bool = False
    err_description: Optional[str] = None

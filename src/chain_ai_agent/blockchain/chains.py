"""Chain definitions for the supported Cronos networks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ChainType(str, Enum):
    EVM = "cronos-evm"
    ZKEVM = "cronos-zkevm"
    ZKEVM_TESTNET = "cronos-zkevm-testnet"


@dataclass(frozen=True)
class Chain:
    """An EVM-compatible network with an explorer API."""

    name: str
    chain_id: int
    rpc_url: str
    native_symbol: str
    explorer_api_url: str


CHAINS: dict[str, Chain] = {
    ChainType.EVM.value: Chain(
        name=ChainType.EVM.value,
        chain_id=25,
        rpc_url="https://evm.cronos.org",
        native_symbol="CRO",
        explorer_api_url="https://explorer-api.cronos.org",
    ),
    ChainType.ZKEVM.value: Chain(
        name=ChainType.ZKEVM.value,
        chain_id=388,
        rpc_url="https://mainnet.zkevm.cronos.org",
        native_symbol="zkCRO",
        explorer_api_url="https://explorer-api.zkevm.cronos.org",
    ),
    ChainType.ZKEVM_TESTNET.value: Chain(
        name=ChainType.ZKEVM_TESTNET.value,
        chain_id=282,
        rpc_url="https://testnet.zkevm.cronos.org",
        native_symbol="zkTCRO",
        explorer_api_url="https://explorer-api.testnet.zkevm.cronos.org",
    ),
}


def list_chain_names() -> list[str]:
    """Return the names of all supported chains."""
    return list(CHAINS.keys())


def _validate_chain_type(name: str) -> ChainType:
    try:
        return ChainType(name)
    except ValueError:
        raise ValueError(
            f"Invalid chain name: {name}. Must be one of {', '.join(list_chain_names())}"
        ) from None


def get_chain(name: str) -> Chain:
    """Get a chain by name. Raises ``ValueError`` if not found."""
    return CHAINS[_validate_chain_type(name).value]


def get_chain_by_id(chain_id: int) -> Chain:
    """Get a chain by its EVM chain id. Raises ``KeyError`` if not found."""
    for chain in CHAINS.values():
        if chain.chain_id == chain_id:
            return chain
    raise KeyError(
        f"Unknown chain id {chain_id}. "
        f"Available: {sorted(c.chain_id for c in CHAINS.values())}"
    )


def get_base_url(chain_name: str) -> str:
    """Return the explorer API base URL for *chain_name*."""
    return get_chain(chain_name).explorer_api_url

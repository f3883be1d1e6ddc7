"""Async Web3 connections for the configured EVM network."""

from __future__ import annotations

import logging

from web3 import AsyncHTTPProvider, AsyncWeb3
from web3.middleware import ExtraDataToPOAMiddleware

logger = logging.getLogger("chain_ai_agent.blockchain.provider")

_instances: dict[str, AsyncWeb3] = {}


def get_web3(rpc_url: str, chain_id: int) -> AsyncWeb3:
    """Return a (cached) ``AsyncWeb3`` instance for *rpc_url*.

    Injects POA middleware for non-mainnet chains, whose blocks carry an
    oversized ``extraData`` field.
    """
    if rpc_url in _instances:
        return _instances[rpc_url]

    w3 = AsyncWeb3(AsyncHTTPProvider(rpc_url))
    if chain_id != 1:
        w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    _instances[rpc_url] = w3
    logger.debug("Created AsyncWeb3 for %s (chain_id=%s)", rpc_url, chain_id)
    return w3

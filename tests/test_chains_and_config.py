"""Tests for chain lookup and config loading."""

from __future__ import annotations

import pytest

from chain_ai_agent.blockchain.chains import get_base_url, get_chain, get_chain_by_id, list_chain_names
from chain_ai_agent.config import (
    default_options,
    get_config_path,
    load_config,
    options_from_env,
    save_config,
)


def test_base_urls_per_chain():
    assert get_base_url("cronos-evm") == "https://explorer-api.cronos.org"
    assert get_base_url("cronos-zkevm") == "https://explorer-api.zkevm.cronos.org"
    assert get_base_url("cronos-zkevm-testnet") == "https://explorer-api.testnet.zkevm.cronos.org"


def test_invalid_chain_name_lists_valid_ones():
    with pytest.raises(ValueError) as exc:
        get_base_url("ethereum")
    assert str(exc.value) == (
        "Invalid chain name: ethereum. "
        "Must be one of cronos-evm, cronos-zkevm, cronos-zkevm-testnet"
    )


def test_chain_by_id():
    assert get_chain_by_id(388).name == "cronos-zkevm"
    assert get_chain_by_id(282).name == "cronos-zkevm-testnet"
    with pytest.raises(KeyError):
        get_chain_by_id(1)


def test_list_chain_names_order():
    assert list_chain_names() == ["cronos-evm", "cronos-zkevm", "cronos-zkevm-testnet"]


def test_load_config_expands_env(tmp_path, monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
    monkeypatch.delenv("EXPLORER_API_KEY", raising=False)
    path = tmp_path / "config.yaml"
    path.write_text(
        "openai:\n"
        "  api_key: ${OPENAI_API_KEY}\n"
        "  model: gpt-4o\n"
        "chain:\n"
        "  id: 388\n"
        "  name: cronos-zkevm\n"
        "  rpc: https://mainnet.zkevm.cronos.org\n"
        "explorer:\n"
        "  api_key: ${EXPLORER_API_KEY}\n",
        encoding="utf-8",
    )

    options = load_config(path)

    assert options.openai.api_key == "sk-from-env"
    assert options.openai.model == "gpt-4o"
    assert options.chain.id == 388
    # Unset variables stay as placeholders
    assert options.explorer.api_key == "${EXPLORER_API_KEY}"
    assert options.wallet.mnemonic == ""


def test_default_options_saved_with_placeholders(tmp_path):
    path = get_config_path(tmp_path)
    save_config(default_options("cronos-zkevm-testnet"), path)

    text = path.read_text(encoding="utf-8")
    assert "${OPENAI_API_KEY}" in text
    assert "${WALLET_MNEMONIC}" in text
    assert path.parent.name == ".chain-ai-agent"

    loaded = load_config(path)
    assert loaded.chain.id == 282
    assert loaded.chain.rpc == get_chain("cronos-zkevm-testnet").rpc_url


def test_options_from_env(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-env")
    monkeypatch.setenv("CHAIN_NAME", "cronos-zkevm")
    monkeypatch.setenv("CHAIN_RPC_URL", "http://node:8545")
    monkeypatch.setenv("WALLET_MNEMONIC", "word " * 11 + "word")

    options = options_from_env()

    assert options.openai.api_key == "sk-env"
    assert options.chain.id == 388
    assert options.chain.rpc == "http://node:8545"
    assert options.wallet.mnemonic.startswith("word")

"""Configuration system for Chain AI Agent.

Loads agent options from `.chain-ai-agent/config.yaml`, supports environment
variable expansion, and can synthesize options from the environment when no
file exists.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

from chain_ai_agent.blockchain.chains import ChainType, get_chain


# ---------------------------------------------------------------------------
# Environment-variable expansion helper
# ---------------------------------------------------------------------------

_ENV_VAR_RE = re.compile(r"\$\{([^}]+)\}")


def _expand_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with their environment values.

    If the variable is not set the placeholder is left as-is so that
    validation can catch it later.
    """

    def _replace(match: re.Match) -> str:
        var_name = match.group(1)
        return os.environ.get(var_name, match.group(0))

    return _ENV_VAR_RE.sub(_replace, value)


def _expand_env_recursive(obj: object) -> object:
    """Walk an arbitrary nested structure and expand env vars in strings."""
    if isinstance(obj, str):
        return _expand_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _expand_env_recursive(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_expand_env_recursive(item) for item in obj]
    return obj


# ---------------------------------------------------------------------------
# Pydantic v2 models
# ---------------------------------------------------------------------------


class OpenAIConfig(BaseModel):
    """OpenAI (or OpenAI-compatible) chat-completions settings."""

    api_key: str = ""
    model: str = "gpt-4"
    base_url: Optional[str] = None  # For OpenAI-compatible endpoints
    max_tokens: int = 4096


class ChainConfig(BaseModel):
    """The EVM network commands are executed against."""

    id: int = 25
    name: str = ChainType.EVM.value
    rpc: str = "https://evm.cronos.org"


class ExplorerConfig(BaseModel):
    """Block-explorer REST API settings."""

    api_key: str = ""
    timeout: float = 30.0


class WalletConfig(BaseModel):
    """HD wallet settings. Accounts are derived from the mnemonic on demand."""

    mnemonic: str = ""


class ServerConfig(BaseModel):
    """HTTP agent-service settings."""

    host: str = "127.0.0.1"
    port: int = 8000


class AgentOptions(BaseModel):
    """Root configuration object."""

    openai: OpenAIConfig = Field(default_factory=OpenAIConfig)
    chain: ChainConfig = Field(default_factory=ChainConfig)
    explorer: ExplorerConfig = Field(default_factory=ExplorerConfig)
    wallet: WalletConfig = Field(default_factory=WalletConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------


def get_root_dir(base: Path | None = None) -> Path:
    """Return the ``.chain-ai-agent/`` directory (no auto-create)."""
    if base is None:
        base = Path.cwd()
    return base / ".chain-ai-agent"


def get_config_path(base: Path | None = None) -> Path:
    """Return the default config file location."""
    return get_root_dir(base) / "config.yaml"


def default_options(chain_name: str = ChainType.EVM.value) -> AgentOptions:
    """Build starter options whose secrets reference environment variables."""
    chain = get_chain(chain_name)
    return AgentOptions(
        openai=OpenAIConfig(api_key="${OPENAI_API_KEY}"),
        chain=ChainConfig(id=chain.chain_id, name=chain.name, rpc=chain.rpc_url),
        explorer=ExplorerConfig(api_key="${EXPLORER_API_KEY}"),
        wallet=WalletConfig(mnemonic="${WALLET_MNEMONIC}"),
    )


def options_from_env() -> AgentOptions:
    """Build options purely from environment variables.

    Used when no config file exists. ``CHAIN_NAME`` selects the network and
    ``CHAIN_RPC_URL`` overrides its default RPC endpoint.
    """
    chain = get_chain(os.environ.get("CHAIN_NAME", ChainType.EVM.value))
    return AgentOptions(
        openai=OpenAIConfig(
            api_key=os.environ.get("OPENAI_API_KEY", ""),
            model=os.environ.get("OPENAI_MODEL", "gpt-4"),
        ),
        chain=ChainConfig(
            id=chain.chain_id,
            name=chain.name,
            rpc=os.environ.get("CHAIN_RPC_URL", chain.rpc_url),
        ),
        explorer=ExplorerConfig(api_key=os.environ.get("EXPLORER_API_KEY", "")),
        wallet=WalletConfig(mnemonic=os.environ.get("WALLET_MNEMONIC", "")),
    )


def load_config(path: Path) -> AgentOptions:
    """Load and validate agent options from a YAML file.

    Environment variable placeholders (``${VAR}``) are expanded before
    validation.
    """
    raw_text = path.read_text(encoding="utf-8")
    raw_data = yaml.safe_load(raw_text) or {}
    expanded = _expand_env_recursive(raw_data)
    return AgentOptions.model_validate(expanded)


def save_config(options: AgentOptions, path: Path) -> None:
    """Serialize :class:`AgentOptions` to a YAML file."""
    path.parent.mkdir(parents=True, exist_ok=True)
    data = options.model_dump(mode="python", exclude_none=True)
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(data, fh, default_flow_style=False, sort_keys=False)

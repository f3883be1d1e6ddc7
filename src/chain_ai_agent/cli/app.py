"""CLI for Chain AI Agent - talk to EVM blockchains from the terminal."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

app = typer.Typer(
    name="chain-ai-agent",
    help="Run blockchain operations from natural-language commands.",
    no_args_is_help=True,
)
console = Console()

_config_path: Path | None = None


def _version_callback(value: bool):
    if value:
        from chain_ai_agent import __version__
        console.print(f"chain-ai-agent {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    config: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config.yaml (default: .chain-ai-agent/config.yaml)",
        envvar="CHAIN_AI_AGENT_CONFIG",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
):
    """Run blockchain operations from natural-language commands."""
    global _config_path
    _config_path = config
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
    )


def _run(coro):
    """Run an async function synchronously."""
    return asyncio.run(coro)


def _load_options():
    """Load options from the config file, or from the environment if there is none."""
    from chain_ai_agent.config import get_config_path, load_config, options_from_env

    path = _config_path or get_config_path()
    if path.exists():
        return load_config(path)
    if _config_path is not None:
        console.print(f"[red]Config file not found: {path}[/red]")
        raise typer.Exit(1)
    return options_from_env()


def _print_result(result) -> None:
    style = "green" if result.status is None or result.status.value == "Success" else "red"
    title = result.action or "reply"
    console.print(Panel(result.message or "(no message)", title=title, border_style=style))
    if result.data:
        console.print(Syntax(json.dumps(result.data, indent=2, default=str), "json"))


# ------------------------------------------------------------------
# init
# ------------------------------------------------------------------


@app.command()
def init(
    chain: str = typer.Option("cronos-evm", "--chain", help="Chain type to target"),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite an existing config"),
):
    """Write a starter config.yaml whose secrets come from environment variables."""
    from chain_ai_agent.config import default_options, get_config_path, save_config

    path = _config_path or get_config_path()
    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}.[/yellow] Use --force to overwrite.")
        raise typer.Exit(1)

    try:
        options = default_options(chain)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    save_config(options, path)
    console.print(Panel(
        f"Config written to [cyan]{path}[/cyan]\n\n"
        "Set [bold]OPENAI_API_KEY[/bold], [bold]EXPLORER_API_KEY[/bold] and "
        "[bold]WALLET_MNEMONIC[/bold] in your environment.",
        title="Initialized",
    ))


# ------------------------------------------------------------------
# query / chat
# ------------------------------------------------------------------


@app.command()
def query(
    text: str = typer.Argument(help="Command, e.g. 'what is the latest block?'"),
):
    """Run a single command and print the result."""
    from chain_ai_agent.core.agent import ChainAiService

    options = _load_options()

    async def _query():
        service = ChainAiService(options)
        try:
            result, _ = await service.process_command(text, [])
        finally:
            await service.aclose()
        return result

    with console.status("Thinking..."):
        result = _run(_query())
    _print_result(result)


@app.command()
def chat():
    """Start an interactive session that keeps recent conversation context."""
    from chain_ai_agent.core.agent import ChainAiService

    options = _load_options()

    async def _chat():
        service = ChainAiService(options)
        context = []
        console.print(f"[bold]Chain AI Agent[/bold] on {options.chain.name} (chain id {options.chain.id})")
        console.print("[dim]Type 'exit' to end the conversation.[/dim]\n")

        try:
            while True:
                try:
                    user_input = console.input("[bold blue]You>[/bold blue] ")
                except (EOFError, KeyboardInterrupt):
                    break

                if user_input.strip().lower() in ("exit", "quit", "bye"):
                    break
                if not user_input.strip():
                    continue

                with console.status("Thinking..."):
                    result, context = await service.process_command(user_input, context)
                _print_result(result)
        finally:
            await service.aclose()
        console.print("[dim]Chat ended.[/dim]")

    _run(_chat())


# ------------------------------------------------------------------
# remote
# ------------------------------------------------------------------


@app.command()
def remote(
    text: str = typer.Argument(help="Command to send to the agent service"),
    url: str = typer.Option(None, "--url", help="Agent service query URL"),
    chain_id: int = typer.Option(25, "--chain-id", help="EVM chain id (25, 338, 388, 282)"),
    model: str = typer.Option("gpt-4o", "--model", help="OpenAI model the service should use"),
    rpc: str = typer.Option(None, "--rpc", help="Custom RPC URL"),
    api_key: str = typer.Option("", "--api-key", envvar="OPENAI_API_KEY", help="OpenAI API key"),
    explorer_key: str = typer.Option("", "--explorer-key", envvar="EXPLORER_API_KEY", help="Explorer API key"),
):
    """Send a command to a running agent service."""
    from chain_ai_agent.client import (
        DEFAULT_SERVICE_URL,
        ClientError,
        ExplorerKeys,
        OpenAIKeys,
        QueryOptions,
        create_client,
    )

    options = QueryOptions(
        open_ai=OpenAIKeys(api_key=api_key, model=model),
        chain_id=chain_id,
        explorer_keys=ExplorerKeys(
            cronos_mainnet_key=explorer_key,
            cronos_testnet_key=explorer_key,
            cronos_zk_evm_key=explorer_key,
            cronos_zk_evm_testnet_key=explorer_key,
        ),
        custom_rpc=rpc,
    )
    client = create_client(options, url=url or DEFAULT_SERVICE_URL)

    try:
        with console.status(f"Sending query: {text}"):
            response = _run(client.agent.generate_query(text))
    except ClientError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(Panel(response.message or "(no message)", title=response.action or "reply"))
    if response.data:
        console.print(Syntax(json.dumps(response.data, indent=2, default=str), "json"))


# ------------------------------------------------------------------
# serve
# ------------------------------------------------------------------


@app.command()
def serve(
    host: str = typer.Option(None, "--host", help="Bind address"),
    port: int = typer.Option(None, "--port", "-p", help="Port"),
):
    """Start the HTTP agent service."""
    from chain_ai_agent.server import start_server

    options = _load_options()
    bind_host = host or options.server.host
    bind_port = port or options.server.port
    console.print(f"[bold]Serving on[/bold] http://{bind_host}:{bind_port}")
    start_server(options, host=bind_host, port=bind_port)


# ------------------------------------------------------------------
# tools / chains
# ------------------------------------------------------------------


@app.command()
def tools():
    """List the blockchain functions the model can call."""
    from chain_ai_agent.catalog import TOOLS

    table = Table(title="Functions")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Description")
    table.add_column("Arguments", style="dim")

    for tool in TOOLS:
        props = tool.parameters.get("properties", {})
        required = set(tool.parameters.get("required", []))
        args = ", ".join(f"{name}*" if name in required else name for name in props)
        table.add_row(tool.name, tool.description, args or "-")
    console.print(table)


@app.command()
def chains():
    """List supported chains."""
    from chain_ai_agent.blockchain.chains import CHAINS

    table = Table(title="Chains")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Chain ID", justify="right")
    table.add_column("Symbol")
    table.add_column("RPC", style="dim")
    table.add_column("Explorer API", style="dim")

    for chain in CHAINS.values():
        table.add_row(
            chain.name,
            str(chain.chain_id),
            chain.native_symbol,
            chain.rpc_url,
            chain.explorer_api_url,
        )
    console.print(table)

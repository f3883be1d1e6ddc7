"""FastAPI agent service answering remote :mod:`chain_ai_agent.client` queries."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from chain_ai_agent.blockchain.chains import get_chain_by_id
from chain_ai_agent.client import QueryOptions
from chain_ai_agent.config import AgentOptions, ChainConfig
from chain_ai_agent.core import services

logger = logging.getLogger("chain_ai_agent.server")

QUERY_PATH = "/api/v1/cdc-ai-agent-service/query"


class QueryRequest(BaseModel):
    query: str
    options: QueryOptions = Field(default_factory=QueryOptions)


def resolve_options(base: AgentOptions, request: QueryOptions) -> AgentOptions:
    """Overlay per-request options onto the server's own configuration.

    The chain comes from ``chainId``; RPC, OpenAI and explorer credentials
    fall back to the server config when the request leaves them empty. The
    wallet mnemonic always stays server-side.

    Raises ``KeyError`` for an unsupported chain id.
    """
    chain = get_chain_by_id(request.chain_id)
    options = base.model_copy(deep=True)
    options.chain = ChainConfig(
        id=chain.chain_id,
        name=chain.name,
        rpc=request.custom_rpc or chain.rpc_url,
    )
    if request.open_ai.api_key:
        options.openai.api_key = request.open_ai.api_key
    if request.open_ai.model:
        options.openai.model = request.open_ai.model
    explorer_key = request.explorer_keys.for_chain(chain.chain_id)
    if explorer_key:
        options.explorer.api_key = explorer_key
    return options


def create_app(base_options: AgentOptions | None = None) -> FastAPI:
    app = FastAPI(title="Chain AI Agent Service")
    app.state.base_options = base_options or AgentOptions()

    @app.get("/healthz")
    async def healthz():
        return {"status": "ok"}

    @app.post(QUERY_PATH)
    async def query(body: QueryRequest):
        try:
            options = resolve_options(app.state.base_options, body.options)
        except KeyError as e:
            return JSONResponse(
                status_code=400,
                content={"status": "Failed", "message": str(e).strip("'\"")},
            )

        try:
            response = await services.generate_response(body.query, options)
        except Exception as e:
            logger.error("[server/query] error: %s", e)
            return JSONResponse(
                status_code=500,
                content={"status": "Failed", "message": str(e)},
            )

        return {
            "action": response["action"],
            "message": response["message"],
            "data": response["object"],
        }

    return app


def start_server(options: AgentOptions, host: str | None = None, port: int | None = None) -> None:
    """Start the agent service (blocking)."""
    app = create_app(options)
    uvicorn.run(
        app,
        host=host or options.server.host,
        port=port or options.server.port,
        log_level="info",
    )

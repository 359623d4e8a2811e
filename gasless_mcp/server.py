"""
MCP server wiring.

Uses the official `mcp` Python SDK. Handles tools/list and tools/call;
the initialize handshake and JSON-RPC framing on stdio belong to the SDK.
"""

from __future__ import annotations

import logging
from typing import Any

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from . import __version__
from .client.wallet_client import SmartWalletClient, configure_with_wallet
from .config import Settings
from .handlers import ToolDispatcher
from .state.store import ClientFactory, SessionStore
from .tools import ALL_TOOLS

log = logging.getLogger("gasless_mcp.server")

SERVER_NAME = "gasless-wallet-mcp"


def wallet_factory(settings: Settings) -> ClientFactory:
  """Session factory building a wallet client from the configured endpoint."""

  async def build(private_key: str) -> SmartWalletClient:
    return await configure_with_wallet(
      private_key,
      rpc_url=settings.rpc_url,
      api_key=settings.api_key.get_secret_value(),
      chain_id=settings.chain_id,
    )

  return build


def create_mcp_server(dispatcher: ToolDispatcher) -> Server:
  """Create and configure the MCP server with all tool handlers."""
  server = Server(SERVER_NAME, version=__version__)

  @server.list_tools()
  async def list_tools() -> list[Tool]:
    return ALL_TOOLS

  @server.call_tool()
  async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
    result = await dispatcher.dispatch(name, arguments or {})
    return [TextContent(type="text", text=result.content)]

  return server


async def run(settings: Settings) -> None:
  """Serve MCP over stdio until the client disconnects."""
  sessions = SessionStore(wallet_factory(settings))
  dispatcher = ToolDispatcher(settings, sessions)
  server = create_mcp_server(dispatcher)

  log.info("Starting %s %s on stdio", SERVER_NAME, __version__)
  async with stdio_server() as (read_stream, write_stream):
    await server.run(read_stream, write_stream, server.create_initialization_options())

"""
Tool call dispatcher.

Maps the tool onto a wallet SDK action, resolves the wallet session,
runs it and renders the outcome as text. Never raises: every failure is
returned as an error result so one bad call cannot take the server down.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from ..actions import BUY_CREDITS_ACTION, LOCAL_ACTIONS, get_mapping
from ..client.openrouter_client import OpenRouterClient
from ..config import Settings
from ..helpers import ToolResult, log_and_format_error, render_result
from ..state.store import SessionStore, WalletSession
from ..validation import validate_arguments
from .credits import CreditPurchaseError, buy_credits

log = logging.getLogger("gasless_mcp.handlers")

OpenRouterFactory = Callable[[str, str], OpenRouterClient]


class ToolDispatcher:
  """Routes ``tools/call`` requests to the wallet."""

  def __init__(
    self,
    settings: Settings,
    sessions: SessionStore,
    openrouter_factory: OpenRouterFactory = OpenRouterClient,
  ) -> None:
    self.settings = settings
    self.sessions = sessions
    self._openrouter_factory = openrouter_factory

  async def dispatch(self, tool_name: str, args: dict[str, Any] | None) -> ToolResult:
    """Dispatch a tool call; always returns a ToolResult."""
    args = args or {}
    log.info("Executing tool: %s with args: %s", tool_name, sorted(args))

    mapping = get_mapping(tool_name)
    if mapping is None:
      log.warning("No mapping for tool %s", tool_name)
      return ToolResult(content=f"Error: No mapping found for tool: {tool_name}", is_error=True)

    try:
      session = await self.sessions.get_or_create(self.settings.private_key.get_secret_value())
    except Exception as e:
      return log_and_format_error(tool_name, e)

    try:
      validate_arguments(tool_name, args)
      sdk_args = mapping.convert(args, session.chain_id)
      if mapping.action in LOCAL_ACTIONS:
        result = await self._run_local(mapping.action, session, sdk_args)
      else:
        result = await session.client.run_action(mapping.action, sdk_args)
      return ToolResult(content=render_result(result))
    except Exception as e:
      return log_and_format_error(tool_name, e)

  async def _run_local(self, action: str, session: WalletSession, sdk_args: dict[str, Any]) -> Any:
    if action == BUY_CREDITS_ACTION:
      api_key = self.settings.openrouter_api_key
      if api_key is None:
        raise CreditPurchaseError("OPENROUTER_API_KEY is not configured; credit purchase is unavailable")
      async with self._openrouter_factory(api_key.get_secret_value(), self.settings.openrouter_base_url) as client:
        return await buy_credits(session, sdk_args["amountUsd"], client)
    raise ValueError(f"Unknown local action: {action}")

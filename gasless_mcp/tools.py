"""
Tool definitions exposed to the MCP client.

The catalog is static: ``tools/list`` serves it without touching the wallet.
``TOOL_SCHEMAS`` holds the plain JSON schemas; argument validation reads
those rather than the SDK's ``Tool`` model.
"""

from __future__ import annotations

from typing import Any

from mcp.types import Tool

from .client.chains import BSC_TOKENS, ZERO_ADDRESS

MIN_CREDIT_USD = 1
MAX_CREDIT_USD = 1000

_KNOWN_TOKENS = ", ".join(f"{symbol}: {address}" for symbol, address in BSC_TOKENS.items())

TOOL_DESCRIPTIONS: dict[str, str] = {
  "get-address": "Gets the smart wallet address",
  "get-balance": (
    "Gets the wallet balance of a token. Omit the address or use "
    f"{ZERO_ADDRESS} for the native currency (BNB on BSC)"
  ),
  "transfer-token": "Transfer tokens from the smart wallet to another address",
  "swap-tokens": "Swap one token for another",
  "buy-openrouter-credits": (
    "Quote a purchase of OpenRouter credits paid in USDC from the smart wallet. "
    "Returns the payment intent; the on-chain payment is not submitted."
  ),
}

TOOL_SCHEMAS: dict[str, dict[str, Any]] = {
  "get-address": {
    "type": "object",
    "properties": {},
    "required": [],
  },
  "get-balance": {
    "type": "object",
    "properties": {
      "address": {
        "type": "string",
        "description": f"Token contract address (use {ZERO_ADDRESS} for the native currency). BSC tokens: {_KNOWN_TOKENS}",
      },
    },
    "required": [],
  },
  "transfer-token": {
    "type": "object",
    "properties": {
      "to": {
        "type": "string",
        "description": "Recipient address",
      },
      "address": {
        "type": "string",
        "description": f"Token contract address (use {ZERO_ADDRESS} for the native currency)",
      },
      "amount": {
        "type": "string",
        "description": "Amount to transfer, as a decimal string (e.g., '0.1')",
      },
    },
    "required": ["to", "address", "amount"],
  },
  "swap-tokens": {
    "type": "object",
    "properties": {
      "fromToken": {
        "type": "string",
        "description": "Source token address",
      },
      "toToken": {
        "type": "string",
        "description": "Destination token address",
      },
      "amount": {
        "type": "string",
        "description": "Amount of the source token to swap",
      },
    },
    "required": ["fromToken", "toToken", "amount"],
  },
  "buy-openrouter-credits": {
    "type": "object",
    "properties": {
      "amountUsd": {
        "type": "number",
        "description": "Amount of credits to buy, in USD",
        "minimum": MIN_CREDIT_USD,
        "maximum": MAX_CREDIT_USD,
      },
    },
    "required": ["amountUsd"],
  },
}

ALL_TOOLS: list[Tool] = [
  Tool(name=name, description=TOOL_DESCRIPTIONS[name], inputSchema=schema)
  for name, schema in TOOL_SCHEMAS.items()
]

TOOLS_BY_NAME: dict[str, Tool] = {tool.name: tool for tool in ALL_TOOLS}

"""
Tool name -> wallet SDK action mapping.

Each public tool maps to one SDK action plus a converter that reshapes the
tool arguments into the SDK's calling convention. Read-only after import.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from .client.chains import is_zero_address, native_symbol
from .validation import opt_string, req_string

Converter = Callable[[dict[str, Any], int], dict[str, Any]]

# Actions implemented in this package rather than by the wallet SDK.
BUY_CREDITS_ACTION = "buy_openrouter_credits"
LOCAL_ACTIONS = frozenset({BUY_CREDITS_ACTION})


@dataclass(frozen=True)
class ActionMapping:
  action: str
  convert: Converter


def convert_address(args: dict[str, Any], chain_id: int) -> dict[str, Any]:
  return {}


def convert_balance(args: dict[str, Any], chain_id: int) -> dict[str, Any]:
  """Zero sentinel (or no address) means the native balance: empty filter."""
  token = opt_string(args, "address")
  if token is None or is_zero_address(token):
    return {"tokenAddresses": []}
  return {"tokenAddresses": [token]}


def convert_transfer(args: dict[str, Any], chain_id: int) -> dict[str, Any]:
  token = req_string(args, "address")
  if is_zero_address(token):
    token = native_symbol(chain_id).lower()
  return {
    "amount": req_string(args, "amount"),
    "destination": req_string(args, "to"),
    "tokenAddress": token,
  }


def convert_swap(args: dict[str, Any], chain_id: int) -> dict[str, Any]:
  return {
    "tokenIn": req_string(args, "fromToken"),
    "tokenOut": req_string(args, "toToken"),
    "amount": req_string(args, "amount"),
  }


def convert_credits(args: dict[str, Any], chain_id: int) -> dict[str, Any]:
  return {"amountUsd": args.get("amountUsd")}


ACTION_MAPPINGS: Mapping[str, ActionMapping] = MappingProxyType(
  {
    "get-address": ActionMapping("get_address", convert_address),
    "get-balance": ActionMapping("get_balance", convert_balance),
    "transfer-token": ActionMapping("smart_transfer", convert_transfer),
    "swap-tokens": ActionMapping("smart_swap", convert_swap),
    "buy-openrouter-credits": ActionMapping(BUY_CREDITS_ACTION, convert_credits),
  }
)


def get_mapping(tool_name: str) -> ActionMapping | None:
  return ACTION_MAPPINGS.get(tool_name)

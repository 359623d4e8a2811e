"""
Shared result formatting and error classification.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

log = logging.getLogger("gasless_mcp.helpers")


# ---------------------------------------------------------------------------
# Tool result
# ---------------------------------------------------------------------------


@dataclass
class ToolResult:
  content: str
  is_error: bool = False


def render_result(value: Any) -> str:
  """Strings pass through; anything else is JSON-encoded."""
  if isinstance(value, str):
    return value
  try:
    return json.dumps(value, ensure_ascii=False, default=str)
  except (TypeError, ValueError):
    return str(value)


# ---------------------------------------------------------------------------
# Error handling
# ---------------------------------------------------------------------------


class ErrorCategory(str, Enum):
  INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
  INVALID_ADDRESS = "INVALID_ADDRESS"
  SMART_ACCOUNT = "SMART_ACCOUNT"
  VALIDATION = "VALIDATION"
  NO_MAPPING = "NO_MAPPING"
  CREDITS = "CREDITS"
  OTHER = "OTHER"


INSUFFICIENT_FUNDS_MESSAGE = (
  "Error: Insufficient funds to complete this operation. "
  "Check the wallet balance and try a smaller amount."
)
INVALID_ADDRESS_MESSAGE = (
  "Error: Invalid address. Check the token and recipient addresses "
  "(0x followed by 40 hex characters)."
)
SMART_ACCOUNT_MESSAGE = (
  "Error: Smart account is not configured. Check PRIVATE_KEY, RPC_URL, "
  "API_KEY and CHAIN_ID."
)

TEMPLATES: dict[ErrorCategory, str] = {
  ErrorCategory.INSUFFICIENT_FUNDS: INSUFFICIENT_FUNDS_MESSAGE,
  ErrorCategory.INVALID_ADDRESS: INVALID_ADDRESS_MESSAGE,
  ErrorCategory.SMART_ACCOUNT: SMART_ACCOUNT_MESSAGE,
}


def _contains(*needles: str) -> Callable[[str], bool]:
  return lambda text: any(n in text for n in needles)


# Evaluated in order against the lower-cased error description; first match wins.
ERROR_RULES: list[tuple[Callable[[str], bool], ErrorCategory]] = [
  (_contains("insufficient funds", "insufficient balance", "exceeds balance"), ErrorCategory.INSUFFICIENT_FUNDS),
  (_contains("invalid address"), ErrorCategory.INVALID_ADDRESS),
  (_contains("smart account"), ErrorCategory.SMART_ACCOUNT),
]


def describe_error(error: BaseException) -> str:
  """Normalized, lower-cased description used for classification."""
  text = str(error) or type(error).__name__
  return " ".join(text.split()).lower()


def classify_error(error: BaseException) -> ErrorCategory:
  from .client.openrouter_client import OpenRouterApiError
  from .handlers.credits import CreditPurchaseError
  from .validation import ValidationError

  if isinstance(error, ValidationError):
    return ErrorCategory.VALIDATION
  if isinstance(error, (OpenRouterApiError, CreditPurchaseError)):
    return ErrorCategory.CREDITS
  description = describe_error(error)
  for predicate, category in ERROR_RULES:
    if predicate(description):
      return category
  return ErrorCategory.OTHER


def log_and_format_error(tool_name: str, error: BaseException) -> ToolResult:
  """Log a failed tool call and render the user-facing text."""
  category = classify_error(error)
  log.error("[MCP] Error in %s - Category: %s - %s", tool_name, category.value, error)

  template = TEMPLATES.get(category)
  if template is not None:
    return ToolResult(content=template, is_error=True)
  return ToolResult(content=f"Error: {error!s}", is_error=True)

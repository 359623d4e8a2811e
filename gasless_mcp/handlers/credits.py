"""
OpenRouter credit purchase (quote only).

Resolves the wallet, asks OpenRouter for a Coinbase payment intent and
renders what the payment would cost. The approval and payment transactions
are NOT built or submitted here.
"""

from __future__ import annotations

import logging
from typing import Any

from ..actions import ACTION_MAPPINGS
from ..client.chains import USDC_DECIMALS, usdc_address
from ..client.openrouter_client import OpenRouterClient
from ..client.wallet_client import from_base_units
from ..state.store import WalletSession

log = logging.getLogger("gasless_mcp.handlers.credits")

SETTLEMENT_NOTICE = (
  "NOTE: This is a quote only. The USDC approval and payment transactions "
  "have NOT been submitted; settlement is not completed by this server."
)


class CreditPurchaseError(Exception):
  """Credit purchase could not be quoted."""


def required_amount(recipient_amount: str | int, fee_amount: str | int, decimals: int = USDC_DECIMALS) -> str:
  """Total of recipient + fee base units, as a decimal string ("1.05")."""
  try:
    total = int(recipient_amount) + int(fee_amount)
  except (TypeError, ValueError) as exc:
    raise CreditPurchaseError(
      f"Malformed payment intent amounts: recipient_amount={recipient_amount!r}, fee_amount={fee_amount!r}"
    ) from exc
  return from_base_units(total, decimals)


def _field(mapping: Any, *path: str) -> Any:
  node = mapping
  for key in path:
    if not isinstance(node, dict) or key not in node:
      raise CreditPurchaseError(f"Malformed payment intent response: missing {'.'.join(path)}")
    node = node[key]
  return node


async def _log_usdc_balance(session: WalletSession, usdc: str) -> None:
  """Pre-flight balance check. Failures are diagnostic only."""
  mapping = ACTION_MAPPINGS["get-balance"]
  try:
    balance = await session.client.run_action(
      mapping.action, mapping.convert({"address": usdc}, session.chain_id)
    )
    log.info("USDC balance before credit purchase: %s", balance)
  except Exception as exc:
    log.warning("USDC balance check failed (continuing): %s", exc)


async def buy_credits(session: WalletSession, amount_usd: float, client: OpenRouterClient) -> str:
  """Quote ``amount_usd`` of OpenRouter credits for the session's wallet."""
  chain_id = session.chain_id
  sender = session.address

  usdc = usdc_address(chain_id)
  if usdc is None:
    raise CreditPurchaseError(f"Unsupported chain for credit purchase: {chain_id}")

  await _log_usdc_balance(session, usdc)

  response = await client.create_coinbase_charge(amount_usd, sender, chain_id)
  data = response.get("data", response) if isinstance(response, dict) else response

  intent_id = _field(data, "id")
  call_data = _field(data, "web3_data", "transfer_intent", "call_data")
  metadata = _field(data, "web3_data", "transfer_intent", "metadata")

  recipient_amount = _field(call_data, "recipient_amount")
  fee_amount = _field(call_data, "fee_amount")
  deadline = _field(call_data, "deadline")
  recipient = call_data.get("recipient", "unknown")
  contract_address = _field(metadata, "contract_address")

  total = required_amount(recipient_amount, fee_amount)
  log.info("Credit purchase quoted: intent=%s total=%s USDC", intent_id, total)

  lines = [
    "OpenRouter credit purchase quote",
    f"Requested amount: ${amount_usd} USD",
    f"USDC required: {total}",
    f"Chain ID: {chain_id}",
    f"Sender: {sender}",
    f"USDC contract: {usdc}",
    f"Payment intent ID: {intent_id}",
    f"Settlement contract: {contract_address}",
    f"Recipient: {recipient}",
    f"Recipient amount (base units): {recipient_amount}",
    f"Fee amount (base units): {fee_amount}",
    f"Deadline: {deadline}",
    "",
    SETTLEMENT_NOTICE,
  ]
  return "\n".join(lines)

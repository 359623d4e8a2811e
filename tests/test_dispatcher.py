from unittest.mock import AsyncMock

import pytest

from gasless_mcp.client.chains import ZERO_ADDRESS
from gasless_mcp.client.wallet_client import WalletError
from gasless_mcp.handlers import ToolDispatcher
from gasless_mcp.helpers import INSUFFICIENT_FUNDS_MESSAGE
from gasless_mcp.state.store import SessionStore
from tests.conftest import FakeWalletClient, make_settings

USDT = "0x55d398326f99059fF775485246999027B3197955"


@pytest.fixture
def dispatcher(settings, session_store) -> ToolDispatcher:
  return ToolDispatcher(settings, session_store)


@pytest.mark.asyncio
async def test_get_balance_native_end_to_end(dispatcher, wallet_client) -> None:
  wallet_client.run_action.return_value = "Balances:\nBNB: 0.42"

  result = await dispatcher.dispatch("get-balance", {"address": ZERO_ADDRESS})

  wallet_client.run_action.assert_awaited_once_with("get_balance", {"tokenAddresses": []})
  assert result.content == "Balances:\nBNB: 0.42"
  assert not result.is_error


@pytest.mark.asyncio
async def test_get_address(dispatcher, wallet_client) -> None:
  wallet_client.run_action.return_value = wallet_client.address

  result = await dispatcher.dispatch("get-address", None)

  wallet_client.run_action.assert_awaited_once_with("get_address", {})
  assert result.content == wallet_client.address


@pytest.mark.asyncio
async def test_transfer_native_uses_symbol(dispatcher, wallet_client) -> None:
  await dispatcher.dispatch(
    "transfer-token",
    {"to": "0x000000000000000000000000000000000000dEaD", "address": ZERO_ADDRESS, "amount": "0.1"},
  )

  wallet_client.run_action.assert_awaited_once_with(
    "smart_transfer",
    {"amount": "0.1", "destination": "0x000000000000000000000000000000000000dEaD", "tokenAddress": "bnb"},
  )


@pytest.mark.asyncio
async def test_non_string_results_are_stringified(dispatcher, wallet_client) -> None:
  wallet_client.run_action.return_value = {"txHash": "0xabc"}

  result = await dispatcher.dispatch("swap-tokens", {"fromToken": USDT, "toToken": ZERO_ADDRESS, "amount": "5"})

  assert result.content == '{"txHash": "0xabc"}'


@pytest.mark.asyncio
async def test_unmapped_tool_reports_no_mapping(dispatcher, wallet_client) -> None:
  result = await dispatcher.dispatch("drain-wallet", {"to": "0xabc"})

  assert "No mapping found for tool: drain-wallet" in result.content
  assert result.is_error
  wallet_client.run_action.assert_not_awaited()


@pytest.mark.asyncio
async def test_insufficient_funds_uses_template(dispatcher, wallet_client) -> None:
  wallet_client.run_action.side_effect = WalletError("Insufficient funds: balance 0 BNB, requested 1")

  result = await dispatcher.dispatch(
    "transfer-token",
    {"to": "0x000000000000000000000000000000000000dEaD", "address": ZERO_ADDRESS, "amount": "1"},
  )

  assert result.content == INSUFFICIENT_FUNDS_MESSAGE


@pytest.mark.asyncio
async def test_unexpected_exception_never_escapes(dispatcher, wallet_client) -> None:
  wallet_client.run_action.side_effect = KeyError("boom")

  result = await dispatcher.dispatch("get-address", {})

  assert result.is_error
  assert "boom" in result.content


@pytest.mark.asyncio
async def test_validation_failure_is_text(dispatcher, wallet_client) -> None:
  result = await dispatcher.dispatch("swap-tokens", {"fromToken": USDT})

  assert result.content.startswith("Error: Missing required parameter")
  wallet_client.run_action.assert_not_awaited()


@pytest.mark.asyncio
async def test_credit_amount_rejected_before_flow(wallet_client) -> None:
  factory = AsyncMock()
  settings = make_settings(openrouter_api_key="or-key")
  dispatcher = ToolDispatcher(settings, SessionStore(AsyncMock(return_value=wallet_client)), factory)

  result = await dispatcher.dispatch("buy-openrouter-credits", {"amountUsd": 5000})

  assert "amountUsd" in result.content
  factory.assert_not_called()


@pytest.mark.asyncio
async def test_credit_purchase_requires_api_key(dispatcher) -> None:
  result = await dispatcher.dispatch("buy-openrouter-credits", {"amountUsd": 10})

  assert "OPENROUTER_API_KEY" in result.content


@pytest.mark.asyncio
async def test_session_failure_is_reported_and_retried(settings) -> None:
  client = FakeWalletClient()
  factory = AsyncMock(side_effect=[WalletError("Smart account not configured: rpc down"), client])
  dispatcher = ToolDispatcher(settings, SessionStore(factory))

  first = await dispatcher.dispatch("get-address", {})
  second = await dispatcher.dispatch("get-address", {})

  assert first.is_error
  assert "Smart account" in first.content
  assert not second.is_error
  assert factory.await_count == 2


@pytest.mark.asyncio
async def test_session_is_built_once_across_calls(settings) -> None:
  factory = AsyncMock(return_value=FakeWalletClient())
  dispatcher = ToolDispatcher(settings, SessionStore(factory))

  await dispatcher.dispatch("get-address", {})
  await dispatcher.dispatch("get-balance", {})

  factory.assert_awaited_once_with(settings.private_key.get_secret_value())


@pytest.mark.asyncio
async def test_unmapped_tool_reports_no_mapping_when_wallet_is_down(settings) -> None:
  factory = AsyncMock(side_effect=WalletError("rpc down"))
  dispatcher = ToolDispatcher(settings, SessionStore(factory))

  result = await dispatcher.dispatch("drain-wallet", {})

  assert result.content == "Error: No mapping found for tool: drain-wallet"
  assert result.is_error
  factory.assert_not_awaited()

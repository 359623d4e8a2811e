import pytest

from gasless_mcp.actions import ACTION_MAPPINGS, BUY_CREDITS_ACTION, get_mapping
from gasless_mcp.client.chains import ZERO_ADDRESS
from gasless_mcp.tools import ALL_TOOLS, TOOL_SCHEMAS, TOOLS_BY_NAME
from gasless_mcp.validation import ValidationError

USDT = "0x55d398326f99059fF775485246999027B3197955"
RECIPIENT = "0x000000000000000000000000000000000000dEaD"


def test_every_catalog_tool_has_a_mapping() -> None:
  names = [tool.name for tool in ALL_TOOLS]

  assert len(names) == len(set(names))
  assert set(names) == set(ACTION_MAPPINGS)


def test_catalog_is_built_from_plain_schemas() -> None:
  assert [tool.name for tool in ALL_TOOLS] == list(TOOL_SCHEMAS)
  for schema in TOOL_SCHEMAS.values():
    assert isinstance(schema, dict)
    assert schema["type"] == "object"


def test_catalog_surface_is_stable() -> None:
  assert set(TOOLS_BY_NAME) == {
    "get-address",
    "get-balance",
    "transfer-token",
    "swap-tokens",
    "buy-openrouter-credits",
  }
  assert TOOL_SCHEMAS["transfer-token"]["required"] == ["to", "address", "amount"]
  assert TOOL_SCHEMAS["swap-tokens"]["required"] == ["fromToken", "toToken", "amount"]

  amount = TOOL_SCHEMAS["buy-openrouter-credits"]["properties"]["amountUsd"]
  assert (amount["minimum"], amount["maximum"]) == (1, 1000)


def test_sdk_action_names() -> None:
  assert get_mapping("get-address").action == "get_address"
  assert get_mapping("get-balance").action == "get_balance"
  assert get_mapping("transfer-token").action == "smart_transfer"
  assert get_mapping("swap-tokens").action == "smart_swap"
  assert get_mapping("buy-openrouter-credits").action == BUY_CREDITS_ACTION
  assert get_mapping("drain-wallet") is None


def test_mapping_table_is_read_only() -> None:
  with pytest.raises(TypeError):
    ACTION_MAPPINGS["drain-wallet"] = ACTION_MAPPINGS["get-address"]  # type: ignore[index]


def test_address_takes_no_arguments() -> None:
  assert get_mapping("get-address").convert({"ignored": 1}, 56) == {}


@pytest.mark.parametrize("args", [{"address": ZERO_ADDRESS}, {}, {"address": ""}])
def test_balance_sentinel_means_native(args: dict) -> None:
  converted = get_mapping("get-balance").convert(args, 56)

  assert converted == {"tokenAddresses": []}
  assert ZERO_ADDRESS not in converted["tokenAddresses"]


def test_balance_token_becomes_single_filter() -> None:
  converted = get_mapping("get-balance").convert({"address": USDT}, 56)

  assert converted == {"tokenAddresses": [USDT]}


def test_transfer_passes_fields_verbatim() -> None:
  converted = get_mapping("transfer-token").convert(
    {"to": RECIPIENT, "address": USDT, "amount": "2.5"}, 56
  )

  assert converted == {"amount": "2.5", "destination": RECIPIENT, "tokenAddress": USDT}


@pytest.mark.parametrize("chain_id, symbol", [(56, "bnb"), (1, "eth"), (137, "pol")])
def test_transfer_sentinel_becomes_native_symbol(chain_id: int, symbol: str) -> None:
  converted = get_mapping("transfer-token").convert(
    {"to": RECIPIENT, "address": ZERO_ADDRESS, "amount": "0.01"}, chain_id
  )

  assert converted["tokenAddress"] == symbol


def test_transfer_requires_recipient() -> None:
  with pytest.raises(ValidationError):
    get_mapping("transfer-token").convert({"address": USDT, "amount": "1"}, 56)


def test_swap_renames_fields() -> None:
  converted = get_mapping("swap-tokens").convert(
    {"fromToken": USDT, "toToken": ZERO_ADDRESS, "amount": "10"}, 56
  )

  assert converted == {"tokenIn": USDT, "tokenOut": ZERO_ADDRESS, "amount": "10"}


def test_credits_pass_amount_only() -> None:
  assert get_mapping("buy-openrouter-credits").convert({"amountUsd": 25}, 8453) == {"amountUsd": 25}

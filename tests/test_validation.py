import pytest

from gasless_mcp.validation import ValidationError, opt_string, req_number, req_string, validate_arguments


def test_req_string_strips_and_rejects_blank() -> None:
  assert req_string({"to": " 0xabc "}, "to") == "0xabc"
  with pytest.raises(ValidationError, match="Missing required parameter: to"):
    req_string({"to": "  "}, "to")


def test_opt_string_ignores_non_strings() -> None:
  assert opt_string({"address": 5}, "address") is None
  assert opt_string({}, "address") is None


def test_req_number_bounds_are_inclusive() -> None:
  assert req_number({"n": 1}, "n", 1, 1000) == 1
  assert req_number({"n": 1000}, "n", 1, 1000) == 1000
  with pytest.raises(ValidationError):
    req_number({"n": True}, "n")


@pytest.mark.parametrize("amount", [0, 0.5, 1000.01, 5000, -3])
def test_credit_amount_out_of_range_is_rejected(amount: float) -> None:
  with pytest.raises(ValidationError):
    validate_arguments("buy-openrouter-credits", {"amountUsd": amount})


@pytest.mark.parametrize("amount", [1, 42.5, 1000])
def test_credit_amount_in_range_is_accepted(amount: float) -> None:
  validate_arguments("buy-openrouter-credits", {"amountUsd": amount})


def test_credit_amount_must_be_a_number() -> None:
  with pytest.raises(ValidationError, match="type number"):
    validate_arguments("buy-openrouter-credits", {"amountUsd": "50"})


def test_missing_required_transfer_field() -> None:
  with pytest.raises(ValidationError, match="amount"):
    validate_arguments("transfer-token", {"to": "0xabc", "address": "0xdef"})


def test_balance_address_is_optional() -> None:
  validate_arguments("get-balance", {})


def test_unknown_tool_is_not_validated() -> None:
  validate_arguments("drain-wallet", {"anything": object()})

from typing import Any
from unittest.mock import AsyncMock

import pytest

from gasless_mcp.config import Settings
from gasless_mcp.state.store import SessionStore

PRIVATE_KEY = "0x" + "11" * 32
OTHER_PRIVATE_KEY = "0x" + "22" * 32
WALLET_ADDRESS = "0x1234567890AbcdEF1234567890aBcdef12345678"


class FakeWalletClient:
  """Stands in for the wallet SDK client; records actions it is asked to run."""

  def __init__(self, chain_id: int = 56, address: str = WALLET_ADDRESS) -> None:
    self.chain_id = chain_id
    self.address = address
    self.run_action = AsyncMock(return_value="ok")


def make_settings(**overrides: Any) -> Settings:
  values: dict[str, Any] = {
    "private_key": PRIVATE_KEY,
    "rpc_url": "https://bsc-dataseed.example.org",
    "api_key": "sdk-api-key",
  }
  values.update(overrides)
  return Settings.model_validate(values)


@pytest.fixture
def settings() -> Settings:
  return make_settings()


@pytest.fixture
def wallet_client() -> FakeWalletClient:
  return FakeWalletClient()


@pytest.fixture
def session_store(wallet_client: FakeWalletClient) -> SessionStore:
  async def factory(private_key: str) -> FakeWalletClient:
    return wallet_client

  return SessionStore(factory)

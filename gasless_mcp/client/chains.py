"""
Static per-chain tables: native currency, V2 router, wrapped native token
and the USDC contract used for credit purchases.
"""

from __future__ import annotations

from dataclasses import dataclass

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

USDC_DECIMALS = 6
NATIVE_DECIMALS = 18

DEFAULT_CHAIN_ID = 56


@dataclass(frozen=True)
class Chain:
  """An EVM network the wallet client knows how to trade on."""

  chain_id: int
  name: str
  native_symbol: str
  router: str | None = None
  wrapped_native: str | None = None
  usdc: str | None = None


CHAINS: dict[int, Chain] = {
  1: Chain(
    chain_id=1,
    name="ethereum",
    native_symbol="ETH",
    router="0x7a250d5630B4cF539739dF2C5dAcb4c659F2488D",  # Uniswap V2
    wrapped_native="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
    usdc="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
  ),
  56: Chain(
    chain_id=56,
    name="bsc",
    native_symbol="BNB",
    router="0x10ED43C718714eb63d5aA57B78B54704E256024E",  # PancakeSwap V2
    wrapped_native="0xbb4CdB9CBd36B01bD1cBaEBF2De08d9173bc095c",
  ),
  137: Chain(
    chain_id=137,
    name="polygon",
    native_symbol="POL",
    router="0xa5E0829CaCEd8fFDD4De3c43696c57F7D7A678ff",  # QuickSwap
    wrapped_native="0x0d500B1d8E8eF31E21C99d1Db9A6444d3ADf1270",
    usdc="0x3c499c542cEF5E3811e1192ce70d8cC03d5c3359",
  ),
  8453: Chain(
    chain_id=8453,
    name="base",
    native_symbol="ETH",
    router="0x4752ba5DBc23f44D87826276BF6Fd6b1C372aD24",  # Uniswap V2
    wrapped_native="0x4200000000000000000000000000000000000006",
    usdc="0x833589fCD6eDb6E08f4c7C32D4f71b54bdA02913",
  ),
}

# Common BSC tokens, surfaced in tool descriptions.
BSC_TOKENS: dict[str, str] = {
  "USDC": "0x8AC76a51cc950d9822D68b83fE1Ad97B32Cd580d",
  "USDT": "0x55d398326f99059fF775485246999027B3197955",
  "WETH": "0x4DB5a66E937A9F4473fA95b1cAF1d1E1D62E29EA",
}


def get_chain(chain_id: int) -> Chain | None:
  """Return the chain entry for ``chain_id``, or None if unknown."""
  return CHAINS.get(chain_id)


def native_symbol(chain_id: int) -> str:
  """Native currency symbol for a chain, falling back to ETH."""
  chain = CHAINS.get(chain_id)
  return chain.native_symbol if chain else "ETH"


def usdc_address(chain_id: int) -> str | None:
  chain = CHAINS.get(chain_id)
  return chain.usdc if chain else None


def is_zero_address(value: str | None) -> bool:
  return bool(value) and value.lower() == ZERO_ADDRESS


def is_native(token: str | None, chain_id: int) -> bool:
  """True when ``token`` names the chain's native currency."""
  if not token:
    return False
  return is_zero_address(token) or token.upper() == native_symbol(chain_id).upper()

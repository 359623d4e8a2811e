"""
Wallet client bound to a single signing key.

Exposes the gasless SDK action surface (``get_address``, ``get_balance``,
``smart_transfer``, ``smart_swap``) on top of web3.py and eth-account.
Every action is async and suspends on RPC I/O only.
"""

from __future__ import annotations

import logging
import time
from decimal import Decimal, InvalidOperation, localcontext
from typing import Any, Protocol, runtime_checkable

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from .chains import NATIVE_DECIMALS, Chain, get_chain, is_native, native_symbol

log = logging.getLogger("gasless_mcp.client.wallet")

RECEIPT_TIMEOUT = 120
DEFAULT_SLIPPAGE_PCT = Decimal("1")
SWAP_DEADLINE_SECONDS = 300
MAX_UINT256 = 2**256 - 1

ERC20_ABI: list[dict[str, Any]] = [
  {
    "constant": True,
    "inputs": [{"name": "owner", "type": "address"}],
    "name": "balanceOf",
    "outputs": [{"name": "", "type": "uint256"}],
    "stateMutability": "view",
    "type": "function",
  },
  {
    "constant": True,
    "inputs": [],
    "name": "decimals",
    "outputs": [{"name": "", "type": "uint8"}],
    "stateMutability": "view",
    "type": "function",
  },
  {
    "constant": True,
    "inputs": [],
    "name": "symbol",
    "outputs": [{"name": "", "type": "string"}],
    "stateMutability": "view",
    "type": "function",
  },
  {
    "constant": True,
    "inputs": [
      {"name": "owner", "type": "address"},
      {"name": "spender", "type": "address"},
    ],
    "name": "allowance",
    "outputs": [{"name": "", "type": "uint256"}],
    "stateMutability": "view",
    "type": "function",
  },
  {
    "inputs": [
      {"name": "spender", "type": "address"},
      {"name": "amount", "type": "uint256"},
    ],
    "name": "approve",
    "outputs": [{"name": "", "type": "bool"}],
    "stateMutability": "nonpayable",
    "type": "function",
  },
  {
    "inputs": [
      {"name": "to", "type": "address"},
      {"name": "amount", "type": "uint256"},
    ],
    "name": "transfer",
    "outputs": [{"name": "", "type": "bool"}],
    "stateMutability": "nonpayable",
    "type": "function",
  },
]

_PATH_INPUTS = [
  {"name": "amountOutMin", "type": "uint256"},
  {"name": "path", "type": "address[]"},
  {"name": "to", "type": "address"},
  {"name": "deadline", "type": "uint256"},
]

ROUTER_ABI: list[dict[str, Any]] = [
  {
    "inputs": [
      {"name": "amountIn", "type": "uint256"},
      {"name": "path", "type": "address[]"},
    ],
    "name": "getAmountsOut",
    "outputs": [{"name": "amounts", "type": "uint256[]"}],
    "stateMutability": "view",
    "type": "function",
  },
  {
    "inputs": _PATH_INPUTS,
    "name": "swapExactETHForTokens",
    "outputs": [{"name": "amounts", "type": "uint256[]"}],
    "stateMutability": "payable",
    "type": "function",
  },
  {
    "inputs": [{"name": "amountIn", "type": "uint256"}, *_PATH_INPUTS],
    "name": "swapExactTokensForETH",
    "outputs": [{"name": "amounts", "type": "uint256[]"}],
    "stateMutability": "nonpayable",
    "type": "function",
  },
  {
    "inputs": [{"name": "amountIn", "type": "uint256"}, *_PATH_INPUTS],
    "name": "swapExactTokensForTokens",
    "outputs": [{"name": "amounts", "type": "uint256[]"}],
    "stateMutability": "nonpayable",
    "type": "function",
  },
]


class WalletError(Exception):
  """Raised when a wallet action cannot be carried out."""


@runtime_checkable
class WalletBackend(Protocol):
  """What the dispatcher needs from a configured wallet SDK client."""

  address: str
  chain_id: int

  async def run_action(self, action: str, args: dict[str, Any]) -> Any: ...


# ---------------------------------------------------------------------------
# Amount helpers
# ---------------------------------------------------------------------------


def to_base_units(amount: str | int | float, decimals: int) -> int:
  """Convert a human amount ("1.5") to integer base units."""
  try:
    value = Decimal(str(amount))
  except InvalidOperation as exc:
    raise WalletError(f"Invalid amount: {amount}") from exc
  if not value.is_finite() or value <= 0:
    raise WalletError(f"Invalid amount: {amount}")
  with localcontext() as ctx:
    ctx.prec = 80
    return int(value.scaleb(decimals))


def from_base_units(value: int, decimals: int) -> str:
  """Render integer base units as a plain decimal string ("1.05")."""
  whole, frac = divmod(int(value), 10**decimals)
  frac_text = str(frac).rjust(decimals, "0").rstrip("0")
  return f"{whole}.{frac_text}" if frac_text else str(whole)


def checksum(address: str) -> str:
  if not isinstance(address, str) or not Web3.is_address(address):
    raise WalletError(f"Invalid address: {address}")
  return Web3.to_checksum_address(address)


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


class SmartWalletClient:
  """Wallet SDK client for one signing key on one chain."""

  def __init__(self, w3: AsyncWeb3, account: Any, chain_id: int) -> None:
    self._w3 = w3
    self._account = account
    self.chain_id = chain_id
    self.address: str = account.address
    self.chain: Chain | None = get_chain(chain_id)
    self._actions = {
      "get_address": self.get_address,
      "get_balance": self.get_balance,
      "smart_transfer": self.smart_transfer,
      "smart_swap": self.smart_swap,
    }

  @property
  def actions(self) -> list[str]:
    return list(self._actions)

  async def run_action(self, action: str, args: dict[str, Any]) -> Any:
    """Execute one SDK action by name."""
    handler = self._actions.get(action)
    if handler is None:
      raise WalletError(f"Unknown wallet action: {action}")
    log.debug("Running wallet action %s", action)
    return await handler(**args)

  # ------------------------------------------------------------------
  # Actions
  # ------------------------------------------------------------------

  async def get_address(self) -> str:
    return self.address

  async def get_balance(self, tokenAddresses: list[str] | None = None) -> str:
    """Native balance when no tokens are given, otherwise one line per token."""
    lines = ["Balances:"]
    if not tokenAddresses:
      wei = await self._w3.eth.get_balance(self.address)
      lines.append(f"{native_symbol(self.chain_id)}: {from_base_units(wei, NATIVE_DECIMALS)}")
      return "\n".join(lines)

    for token in tokenAddresses:
      contract = self._erc20(token)
      raw = await contract.functions.balanceOf(self.address).call()
      decimals = await contract.functions.decimals().call()
      symbol = await self._token_symbol(contract, token)
      lines.append(f"{symbol}: {from_base_units(raw, decimals)}")
    return "\n".join(lines)

  async def smart_transfer(self, amount: str, destination: str, tokenAddress: str) -> str:
    """Transfer native currency or an ERC20 token to ``destination``."""
    to = checksum(destination)
    if is_native(tokenAddress, self.chain_id):
      value = to_base_units(amount, NATIVE_DECIMALS)
      balance = await self._w3.eth.get_balance(self.address)
      if balance < value:
        raise WalletError(
          f"Insufficient funds: balance {from_base_units(balance, NATIVE_DECIMALS)} "
          f"{native_symbol(self.chain_id)}, requested {amount}"
        )
      tx = {
        "to": to,
        "value": value,
        "gas": 21000,
        "gasPrice": await self._w3.eth.gas_price,
        "nonce": await self._w3.eth.get_transaction_count(self.address),
        "chainId": self.chain_id,
      }
      symbol = native_symbol(self.chain_id)
    else:
      contract = self._erc20(tokenAddress)
      decimals = await contract.functions.decimals().call()
      value = to_base_units(amount, decimals)
      balance = await contract.functions.balanceOf(self.address).call()
      if balance < value:
        raise WalletError(
          f"Insufficient funds: token balance {from_base_units(balance, decimals)}, requested {amount}"
        )
      tx = await contract.functions.transfer(to, value).build_transaction(await self._tx_params())
      symbol = await self._token_symbol(contract, tokenAddress)

    tx_hash = await self._send(tx)
    return f"Transferred {amount} {symbol} to {to}\nTransaction hash: {tx_hash}"

  async def smart_swap(
    self,
    tokenIn: str,
    tokenOut: str,
    amount: str,
    slippage: str | float | None = None,
  ) -> str:
    """Swap through the chain's V2 router, approving it first when needed."""
    chain = self.chain
    if chain is None or not chain.router or not chain.wrapped_native:
      raise WalletError(f"Swaps are not supported on chain {self.chain_id}")

    native_in = is_native(tokenIn, self.chain_id)
    native_out = is_native(tokenOut, self.chain_id)
    if native_in and native_out:
      raise WalletError("Invalid address: tokenIn and tokenOut are both the native currency")

    path_in = checksum(chain.wrapped_native) if native_in else checksum(tokenIn)
    path_out = checksum(chain.wrapped_native) if native_out else checksum(tokenOut)
    path = [path_in, path_out]

    decimals_in = NATIVE_DECIMALS if native_in else await self._erc20(path_in).functions.decimals().call()
    decimals_out = NATIVE_DECIMALS if native_out else await self._erc20(path_out).functions.decimals().call()
    amount_in = to_base_units(amount, decimals_in)

    if native_in:
      balance = await self._w3.eth.get_balance(self.address)
    else:
      balance = await self._erc20(path_in).functions.balanceOf(self.address).call()
    if balance < amount_in:
      raise WalletError(
        f"Insufficient funds: balance {from_base_units(balance, decimals_in)}, requested {amount}"
      )

    router = self._w3.eth.contract(address=checksum(chain.router), abi=ROUTER_ABI)
    amounts = await router.functions.getAmountsOut(amount_in, path).call()
    slippage_pct = Decimal(str(slippage)) if slippage is not None else DEFAULT_SLIPPAGE_PCT
    amount_out_min = int(Decimal(amounts[-1]) * (Decimal(100) - slippage_pct) / Decimal(100))
    deadline = int(time.time()) + SWAP_DEADLINE_SECONDS

    if not native_in:
      await self._ensure_allowance(path_in, router.address, amount_in)

    if native_in:
      params = await self._tx_params(value=amount_in)
      tx = await router.functions.swapExactETHForTokens(
        amount_out_min, path, self.address, deadline
      ).build_transaction(params)
    elif native_out:
      tx = await router.functions.swapExactTokensForETH(
        amount_in, amount_out_min, path, self.address, deadline
      ).build_transaction(await self._tx_params())
    else:
      tx = await router.functions.swapExactTokensForTokens(
        amount_in, amount_out_min, path, self.address, deadline
      ).build_transaction(await self._tx_params())

    tx_hash = await self._send(tx)
    expected = from_base_units(amounts[-1], decimals_out)
    return (
      f"Swapped {amount} {tokenIn} for ~{expected} {tokenOut}\n"
      f"Minimum received: {from_base_units(amount_out_min, decimals_out)}\n"
      f"Transaction hash: {tx_hash}"
    )

  # ------------------------------------------------------------------
  # Internals
  # ------------------------------------------------------------------

  def _erc20(self, token: str) -> Any:
    return self._w3.eth.contract(address=checksum(token), abi=ERC20_ABI)

  async def _token_symbol(self, contract: Any, fallback: str) -> str:
    try:
      return await contract.functions.symbol().call()
    except Exception as exc:
      log.debug("symbol() failed for %s: %s", fallback, exc)
      return fallback

  async def _tx_params(self, value: int = 0) -> dict[str, Any]:
    params: dict[str, Any] = {
      "from": self.address,
      "nonce": await self._w3.eth.get_transaction_count(self.address),
      "gasPrice": await self._w3.eth.gas_price,
      "chainId": self.chain_id,
    }
    if value:
      params["value"] = value
    return params

  async def _ensure_allowance(self, token: str, spender: str, amount: int) -> None:
    contract = self._erc20(token)
    allowance = await contract.functions.allowance(self.address, spender).call()
    if allowance >= amount:
      return
    log.info("Approving router %s for token %s", spender, token)
    tx = await contract.functions.approve(spender, MAX_UINT256).build_transaction(await self._tx_params())
    await self._send(tx)

  async def _send(self, tx: dict[str, Any]) -> str:
    signed = self._account.sign_transaction(tx)
    tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
    receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash, timeout=RECEIPT_TIMEOUT)
    hex_hash = Web3.to_hex(tx_hash)
    if receipt.get("status") != 1:
      raise WalletError(f"Transaction reverted: {hex_hash}")
    return hex_hash


async def configure_with_wallet(
  private_key: str,
  rpc_url: str,
  api_key: str,
  chain_id: int,
) -> SmartWalletClient:
  """Build a client for ``private_key`` and check the RPC serves ``chain_id``."""
  try:
    account = Account.from_key(private_key)
  except (ValueError, TypeError) as exc:
    raise WalletError(f"Smart account not configured: invalid signing key ({exc})") from exc

  provider = AsyncHTTPProvider(
    rpc_url,
    request_kwargs={"headers": {"x-api-key": api_key}},
  )
  w3 = AsyncWeb3(provider)

  remote_chain_id = await w3.eth.chain_id
  if remote_chain_id != chain_id:
    raise WalletError(
      f"Smart account not configured: RPC endpoint serves chain {remote_chain_id}, "
      f"CHAIN_ID is {chain_id}"
    )

  log.info("Wallet configured on chain %d for %s", chain_id, account.address)
  return SmartWalletClient(w3, account, chain_id)

"""
Async HTTP client for the OpenRouter credits API.

Uses aiohttp with bearer token auth. Only the Coinbase charge endpoint is
needed: it returns a transfer intent quoting the on-chain payment.
"""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

log = logging.getLogger("gasless_mcp.client.openrouter")

BASE_URL = "https://openrouter.ai/api/v1"
REQUEST_TIMEOUT = 30


class OpenRouterApiError(Exception):
  """Non-2xx response from the OpenRouter API."""

  def __init__(self, status: int, body: str):
    self.status = status
    self.body = body
    super().__init__(f"OpenRouter API error {status}: {body}")


class OpenRouterClient:
  """Async HTTP client for the OpenRouter API."""

  def __init__(self, api_key: str, base_url: str = BASE_URL) -> None:
    self._api_key = api_key
    self._base_url = base_url.rstrip("/")
    self._session: aiohttp.ClientSession | None = None

  async def __aenter__(self) -> OpenRouterClient:
    await self.connect()
    return self

  async def __aexit__(self, *exc_info: Any) -> None:
    await self.close()

  async def connect(self) -> None:
    """Create the aiohttp session."""
    if self._session and not self._session.closed:
      return
    self._session = aiohttp.ClientSession(
      headers={
        "Authorization": f"Bearer {self._api_key}",
        "Content-Type": "application/json",
      },
      timeout=aiohttp.ClientTimeout(total=REQUEST_TIMEOUT),
    )

  async def close(self) -> None:
    """Close the aiohttp session."""
    if self._session and not self._session.closed:
      await self._session.close()
      self._session = None

  async def create_coinbase_charge(self, amount: float, sender: str, chain_id: int) -> dict[str, Any]:
    """Create a payment intent for ``amount`` USD paid from ``sender``."""
    if not self._session:
      raise OpenRouterApiError(0, "Client not connected. Call connect() first.")

    url = f"{self._base_url}/credits/coinbase"
    payload = {"amount": amount, "sender": sender, "chain_id": chain_id}
    log.info("Creating OpenRouter charge: amount=%s chain_id=%s", amount, chain_id)

    async with self._session.post(url, json=payload) as resp:
      if resp.status < 200 or resp.status >= 300:
        body = await resp.text()
        raise OpenRouterApiError(resp.status, body)
      return await resp.json()

"""
Wallet session store.

One session per distinct signing key for the life of the process. Sessions
are keyed by a fingerprint of the key, never by the key itself. Concurrent
first calls for the same key share a single in-flight construction.
"""

from __future__ import annotations

import asyncio
import hashlib
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
  from ..client.wallet_client import WalletBackend

log = logging.getLogger("gasless_mcp.state.store")

ClientFactory = Callable[[str], Awaitable["WalletBackend"]]


def key_fingerprint(private_key: str) -> str:
  """Stable, non-reversible cache key for a signing key."""
  return hashlib.sha256(private_key.lower().encode("utf-8")).hexdigest()[:12]


@dataclass(frozen=True)
class WalletSession:
  """A configured wallet client and what was derived from it."""

  fingerprint: str
  client: WalletBackend
  chain_id: int
  address: str


class SessionStore:
  """Lazily builds and memoizes wallet sessions."""

  def __init__(self, factory: ClientFactory) -> None:
    self._factory = factory
    self._sessions: dict[str, WalletSession] = {}
    self._pending: dict[str, asyncio.Task[WalletSession]] = {}

  def __len__(self) -> int:
    return len(self._sessions)

  def get(self, private_key: str) -> WalletSession | None:
    """Return the session for ``private_key`` without building one."""
    return self._sessions.get(key_fingerprint(private_key))

  async def get_or_create(self, private_key: str) -> WalletSession:
    """Return the cached session or build it, at most once per key."""
    fingerprint = key_fingerprint(private_key)
    session = self._sessions.get(fingerprint)
    if session is not None:
      return session

    task = self._pending.get(fingerprint)
    if task is None:
      log.info("Creating wallet session %s", fingerprint)
      task = asyncio.ensure_future(self._build(fingerprint, private_key))
      self._pending[fingerprint] = task
      task.add_done_callback(lambda _t, fp=fingerprint: self._pending.pop(fp, None))
    else:
      log.debug("Waiting for in-flight wallet session %s", fingerprint)

    # shield: one cancelled waiter must not cancel construction for the others
    return await asyncio.shield(task)

  async def _build(self, fingerprint: str, private_key: str) -> WalletSession:
    try:
      client = await self._factory(private_key)
    except Exception:
      log.exception("Wallet session %s failed to initialize", fingerprint)
      raise
    session = WalletSession(
      fingerprint=fingerprint,
      client=client,
      chain_id=client.chain_id,
      address=client.address,
    )
    self._sessions[fingerprint] = session
    log.info("Wallet session %s ready: %s on chain %d", fingerprint, session.address, session.chain_id)
    return session

"""
Startup configuration.

All settings come from the environment (optionally seeded from a ``.env``
file) and are validated once into a frozen ``Settings`` model. Any invalid
or missing required value aborts startup.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Mapping
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, SecretStr, ValidationError, field_validator

from .client.chains import DEFAULT_CHAIN_ID, get_chain
from .state.store import key_fingerprint

log = logging.getLogger("gasless_mcp.config")

PRIVATE_KEY_RE = re.compile(r"^0x[0-9a-fA-F]{64}$")

# Settings field -> environment variable
ENV_VARS: dict[str, str] = {
  "private_key": "PRIVATE_KEY",
  "rpc_url": "RPC_URL",
  "api_key": "API_KEY",
  "chain_id": "CHAIN_ID",
  "openrouter_api_key": "OPENROUTER_API_KEY",
  "openrouter_base_url": "OPENROUTER_BASE_URL",
  "log_level": "LOG_LEVEL",
}


class ConfigError(Exception):
  """Raised when the environment does not describe a usable wallet."""

  def __init__(self, errors: list[str]):
    self.errors = errors
    super().__init__("Invalid configuration: " + "; ".join(errors))


class Settings(BaseModel):
  """Validated server configuration."""

  model_config = ConfigDict(frozen=True)

  private_key: SecretStr = Field(description="Hex-prefixed signing key")
  rpc_url: str = Field(description="Chain RPC endpoint")
  api_key: SecretStr = Field(description="Wallet SDK API key")
  chain_id: int = Field(default=DEFAULT_CHAIN_ID, gt=0)
  openrouter_api_key: SecretStr | None = None
  openrouter_base_url: str = "https://openrouter.ai/api/v1"
  log_level: str = "INFO"

  @field_validator("private_key")
  @classmethod
  def _check_private_key(cls, value: SecretStr) -> SecretStr:
    if not PRIVATE_KEY_RE.match(value.get_secret_value()):
      raise ValueError("must be 0x followed by 64 hex characters")
    return value

  @field_validator("rpc_url", "openrouter_base_url")
  @classmethod
  def _check_url(cls, value: str) -> str:
    if not value.startswith(("http://", "https://")):
      raise ValueError("must be an http(s) URL")
    return value

  @field_validator("api_key")
  @classmethod
  def _check_api_key(cls, value: SecretStr) -> SecretStr:
    if not value.get_secret_value().strip():
      raise ValueError("must not be empty")
    return value

  @field_validator("log_level")
  @classmethod
  def _check_log_level(cls, value: str) -> str:
    level = value.upper()
    if level not in logging.getLevelNamesMapping():
      raise ValueError(f"unknown log level {value!r}")
    return level

  @property
  def fingerprint(self) -> str:
    return key_fingerprint(self.private_key.get_secret_value())

  @property
  def credits_enabled(self) -> bool:
    return self.openrouter_api_key is not None


def load_dotenv_files(path: str | Path = ".env") -> bool:
  """Load ``path`` into the environment without overriding real variables."""
  return load_dotenv(path, override=False)


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
  """Build ``Settings`` from ``environ``; raise ConfigError listing every problem."""
  env = os.environ if environ is None else environ
  raw: dict[str, str] = {}
  for field, var in ENV_VARS.items():
    value = env.get(var)
    if value is not None and value.strip():
      raw[field] = value.strip()

  try:
    return Settings.model_validate(raw)
  except ValidationError as exc:
    errors = []
    for err in exc.errors():
      field = str(err["loc"][0]) if err["loc"] else "?"
      var = ENV_VARS.get(field, field)
      message = "is required" if err["type"] == "missing" else err["msg"]
      errors.append(f"{var} {message}")
    raise ConfigError(errors) from exc


def log_settings_summary(settings: Settings) -> None:
  """Write a validation summary to the diagnostic log. Secrets are never shown."""
  chain = get_chain(settings.chain_id)
  log.info("Configuration validated")
  log.info("  PRIVATE_KEY: set (fingerprint %s)", settings.fingerprint)
  log.info("  RPC_URL: %s", settings.rpc_url)
  log.info("  API_KEY: set")
  log.info(
    "  CHAIN_ID: %d (%s)",
    settings.chain_id,
    chain.name if chain else "unknown chain, swaps disabled",
  )
  log.info("  OPENROUTER_API_KEY: %s", "set" if settings.credits_enabled else "not set (credit purchase disabled)")

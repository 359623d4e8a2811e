"""
Entry point for the gasless wallet MCP server.

Run with: python -m gasless_mcp
"""

from __future__ import annotations

import asyncio
import logging
import sys

logging.basicConfig(
  level=logging.INFO,
  format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
  stream=sys.stderr,
)

log = logging.getLogger("gasless_mcp")


def main() -> None:
  from .config import ConfigError, load_dotenv_files, load_settings, log_settings_summary
  from .server import run

  load_dotenv_files()
  try:
    settings = load_settings()
  except ConfigError as exc:
    log.error("Missing or invalid environment variables:")
    for error in exc.errors:
      log.error("  %s", error)
    sys.exit(1)

  logging.getLogger().setLevel(settings.log_level)
  log_settings_summary(settings)

  try:
    asyncio.run(run(settings))
  except KeyboardInterrupt:
    log.info("Interrupted, shutting down")
  except Exception:
    log.exception("Fatal error")
    sys.exit(1)


if __name__ == "__main__":
  main()

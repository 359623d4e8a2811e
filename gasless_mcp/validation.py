"""
Input validation helpers for tool arguments.
"""

from __future__ import annotations

from typing import Any

from .tools import TOOL_SCHEMAS


class ValidationError(Exception):
  pass


def req_string(args: dict[str, Any], key: str) -> str:
  """Read a required string from args."""
  v = args.get(key)
  if not isinstance(v, str) or not v.strip():
    raise ValidationError(f"Missing required parameter: {key}")
  return v.strip()


def opt_string(args: dict[str, Any], key: str) -> str | None:
  """Read an optional string from args."""
  v = args.get(key)
  if isinstance(v, str) and v.strip():
    return v.strip()
  return None


def req_number(
  args: dict[str, Any],
  key: str,
  minimum: float | None = None,
  maximum: float | None = None,
) -> float:
  """Read a required number from args, optionally bounded (inclusive)."""
  v = args.get(key)
  if isinstance(v, bool) or not isinstance(v, (int, float)):
    raise ValidationError(f"Missing required parameter: {key} (must be a number)")
  if minimum is not None and v < minimum:
    raise ValidationError(f"Parameter {key} must be >= {minimum}, got {v}")
  if maximum is not None and v > maximum:
    raise ValidationError(f"Parameter {key} must be <= {maximum}, got {v}")
  return v


_TYPE_CHECKS = {
  "string": lambda v: isinstance(v, str),
  "number": lambda v: isinstance(v, (int, float)) and not isinstance(v, bool),
  "integer": lambda v: isinstance(v, int) and not isinstance(v, bool),
  "boolean": lambda v: isinstance(v, bool),
  "object": lambda v: isinstance(v, dict),
  "array": lambda v: isinstance(v, list),
}


def validate_arguments(tool_name: str, args: dict[str, Any]) -> None:
  """Check ``args`` against the catalog schema of ``tool_name``.

  Covers ``required``, property ``type`` and numeric ``minimum``/``maximum``.
  """
  schema = TOOL_SCHEMAS.get(tool_name)
  if schema is None:
    return
  properties: dict[str, Any] = schema.get("properties", {})

  for key in schema.get("required", []):
    value = args.get(key)
    if value is None or (isinstance(value, str) and not value.strip()):
      raise ValidationError(f"Missing required parameter: {key}")

  for key, prop in properties.items():
    if key not in args or args[key] is None:
      continue
    value = args[key]
    check = _TYPE_CHECKS.get(prop.get("type", ""))
    if check and not check(value):
      raise ValidationError(f"Parameter {key} must be of type {prop['type']}")
    if prop.get("type") in ("number", "integer"):
      req_number(args, key, prop.get("minimum"), prop.get("maximum"))

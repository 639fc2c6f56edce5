"""JSON Schema validation helpers for MCP tool input/output contracts.

This module wraps jsonschema Draft7 validation with strict and best-effort
helpers. Input failures surface as ``InvalidParameterError`` so the tool layer
reports them like any other invalid argument.
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from jsonschema import Draft7Validator

from common.errors import InvalidParameterError

logger = logging.getLogger(__name__)


def _first_error(schema: Dict[str, Any], data: Dict[str, Any]):
    validator = Draft7Validator(schema)
    errs = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
    return errs[0] if errs else None


def strip_unset(data: Dict[str, Any]) -> Dict[str, Any]:
    """Drop None values so optional arguments are treated as absent."""
    return {k: v for k, v in data.items() if v is not None}


def validate_input(schema: Dict[str, Any], data: Dict[str, Any]) -> None:
    """Validate tool input strictly and raise on the first error.

    Args:
        schema: Draft-07 JSON Schema dict.
        data:   Input payload to validate.

    Raises:
        InvalidParameterError: naming the offending property (or ``input``).
    """
    first = _first_error(schema, data)
    if first is None:
        return
    path = "/".join(str(p) for p in first.path)
    parameter = str(first.path[0]) if first.path else "input"
    raise InvalidParameterError(parameter, f"Invalid input at '{path}': {first.message}")


def safe_validate_output(schema: Dict[str, Any], data: Dict[str, Any]) -> None:
    """Validate output best-effort; log instead of raising to keep tool replies intact."""
    first = _first_error(schema, data)
    if first is not None:
        path = "/".join(str(p) for p in first.path)
        logger.warning("Tool output failed schema validation at '%s': %s", path, first.message)

"""Argument validation shared by the CLI and the MCP tools.

Every validator either returns the normalized value or raises an
``InvalidInputError`` subclass, so bad input is rejected before any cache
lookup or upstream call.
"""
from __future__ import annotations

import re
from typing import Any, Optional

from common.errors import InvalidParameterError
from constants import Constants
from versioning.models import MavenCoordinate
from versioning.parser import is_range, parse_coordinate

_VERSION_TOKEN_RE = re.compile(r"^[a-zA-Z0-9._-]+$")


def validate_package_name(package_name: Any) -> MavenCoordinate:
    """``groupId:artifactId`` with both parts made of ``[A-Za-z0-9._-]``."""
    return parse_coordinate(package_name)


def validate_version(version: Any) -> str:
    """Accept ``latest``, a plain version token or a bracket range."""
    if version is None:
        return "latest"
    if not isinstance(version, str) or not version.strip():
        raise InvalidParameterError("version", "version must be a non-empty string")
    text = version.strip()
    if len(text) > Constants.VERSION_MAX_LENGTH:
        raise InvalidParameterError(
            "version", f"version must be at most {Constants.VERSION_MAX_LENGTH} characters"
        )
    if text == "latest" or _VERSION_TOKEN_RE.match(text) or is_range(text):
        return text
    raise InvalidParameterError("version", f"Invalid version format: '{version}'")


def validate_search_query(query: Any) -> str:
    if not isinstance(query, str) or not query.strip():
        raise InvalidParameterError("query", "query is required and must be a non-empty string")
    text = query.strip()
    if len(text) > Constants.SEARCH_MAX_QUERY_LENGTH:
        raise InvalidParameterError(
            "query", f"query must be at most {Constants.SEARCH_MAX_QUERY_LENGTH} characters"
        )
    return text


def validate_limit(limit: Any) -> int:
    if limit is None:
        return Constants.SEARCH_DEFAULT_LIMIT
    # bool is an int subclass
    if isinstance(limit, bool) or not isinstance(limit, int):
        raise InvalidParameterError("limit", "limit must be an integer")
    if not 1 <= limit <= Constants.SEARCH_MAX_LIMIT:
        raise InvalidParameterError(
            "limit", f"limit must be a number between 1 and {Constants.SEARCH_MAX_LIMIT}"
        )
    return limit


def validate_score(score: Any, name: str = "score") -> Optional[float]:
    """Optional threshold in ``[0, 1]``."""
    if score is None:
        return None
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise InvalidParameterError(name, f"{name} must be a number between 0 and 1")
    if not 0 <= score <= 1:
        raise InvalidParameterError(name, f"{name} must be a number between 0 and 1")
    return float(score)

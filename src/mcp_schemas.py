"""Draft-07 JSON Schemas for MCP tool inputs and outputs."""

from __future__ import annotations

from typing import Any, Dict

_PACKAGE_NAME = {
    "type": "string",
    "pattern": r"^[a-zA-Z0-9._-]+:[a-zA-Z0-9._-]+$",
    "description": "Maven coordinate in groupId:artifactId form",
}

_SCORE = {"type": "number", "minimum": 0, "maximum": 1}

GET_PACKAGE_README_INPUT: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "package_name": _PACKAGE_NAME,
        "version": {"type": "string", "minLength": 1, "maxLength": 128},
        "include_examples": {"type": "boolean"},
    },
    "required": ["package_name"],
    "additionalProperties": False,
}

GET_PACKAGE_INFO_INPUT: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "package_name": _PACKAGE_NAME,
        "include_dependencies": {"type": "boolean"},
        "include_dev_dependencies": {"type": "boolean"},
    },
    "required": ["package_name"],
    "additionalProperties": False,
}

SEARCH_PACKAGES_INPUT: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "query": {"type": "string", "minLength": 1, "maxLength": 500},
        "limit": {"type": "integer", "minimum": 1, "maximum": 250},
        "quality": _SCORE,
        "popularity": _SCORE,
    },
    "required": ["query"],
    "additionalProperties": False,
}

RESOLVE_VERSION_INPUT: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "package_name": _PACKAGE_NAME,
        "version": {"type": "string", "minLength": 1, "maxLength": 128},
    },
    "required": ["package_name"],
    "additionalProperties": False,
}

GET_VERSIONS_INPUT: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "package_name": _PACKAGE_NAME,
        "include_prereleases": {"type": "boolean"},
    },
    "required": ["package_name"],
    "additionalProperties": False,
}

RESOLVE_VERSION_OUTPUT: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "package_name": {"type": "string"},
        "requested": {"type": "string"},
        "resolved_version": {"type": "string"},
        "mode": {"type": "string", "enum": ["latest", "exact", "range"]},
        "is_prerelease": {"type": "boolean"},
    },
    "required": ["package_name", "requested", "resolved_version", "mode", "is_prerelease"],
    "additionalProperties": False,
}

SEARCH_PACKAGES_OUTPUT: Dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "query": {"type": "string"},
        "total": {"type": "integer", "minimum": 0},
        "packages": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "groupId": {"type": "string"},
                    "artifactId": {"type": "string"},
                    "version": {"type": "string"},
                    "score": {
                        "type": "object",
                        "properties": {
                            "final": _SCORE,
                            "detail": {
                                "type": "object",
                                "properties": {
                                    "quality": _SCORE,
                                    "popularity": _SCORE,
                                    "maintenance": _SCORE,
                                },
                                "required": ["quality", "popularity", "maintenance"],
                            },
                        },
                        "required": ["final", "detail"],
                    },
                },
                "required": ["groupId", "artifactId", "version", "score"],
            },
        },
    },
    "required": ["query", "total", "packages"],
}

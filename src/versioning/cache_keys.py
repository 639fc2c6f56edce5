"""Cache key construction for each cached operation.

Keys are a fixed operation prefix plus every parameter that changes the
result, so distinct calls never collide and identical calls always hit.
"""
from __future__ import annotations

import hashlib
import json
from typing import Optional

from constants import Constants

_SEP = ":"


def _join(*parts: object) -> str:
    return _SEP.join(str(p) for p in parts)


class CacheKeys:  # pylint: disable=too-few-public-methods
    """Namespace of key builders; every method is pure."""

    @staticmethod
    def package_info(group_id: str, artifact_id: str, version: Optional[str] = None) -> str:
        return _join("pkg_info", group_id, artifact_id, version or "latest")

    @staticmethod
    def package_readme(group_id: str, artifact_id: str, version: Optional[str] = None) -> str:
        return _join("pkg_readme", group_id, artifact_id, version or "latest")

    @staticmethod
    def versions(group_id: str, artifact_id: str) -> str:
        return _join("versions", group_id, artifact_id)

    @staticmethod
    def pom(group_id: str, artifact_id: str, version: str) -> str:
        return _join("pom", group_id, artifact_id, version)

    @staticmethod
    def package_exists(group_id: str, artifact_id: str) -> str:
        return _join("pkg_exists", group_id, artifact_id)

    @staticmethod
    def github_readme(owner: str, repo: str) -> str:
        return _join("github_readme", owner, repo)

    @staticmethod
    def search(
        query: str,
        limit: Optional[int] = None,
        quality: Optional[float] = None,
        popularity: Optional[float] = None,
        start: int = 0,
    ) -> str:
        """Fold the search parameters into a bounded-length key.

        The digest only needs to be stable and content-derived; it is not a
        security boundary.
        """
        params = json.dumps(
            [
                query,
                Constants.SEARCH_DEFAULT_LIMIT if limit is None else limit,
                "any" if quality is None else quality,
                "any" if popularity is None else popularity,
                start,
            ]
        )
        digest = hashlib.sha256(params.encode("utf-8")).hexdigest()[:16]
        return _join("search", digest)

    @staticmethod
    def upstream_search(query: str, rows: int, start: int = 0) -> str:
        """Raw upstream search response, kept apart from shaped tool results."""
        params = json.dumps([query, rows, start])
        digest = hashlib.sha256(params.encode("utf-8")).hexdigest()[:16]
        return _join("upstream_search", digest)

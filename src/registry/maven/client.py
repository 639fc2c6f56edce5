"""Maven Central client: search, version listing and POM retrieval.

Every method is cache-first. On a miss the upstream call runs under
``with_retry`` and the result is stored with an operation-specific TTL.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from common.errors import HttpStatusError, PackageNotFoundError, VersionNotFoundError
from common.http_client import HttpClient
from common.logging_utils import extra_context
from common.retry import with_retry
from constants import CacheTTL, Constants
from versioning.cache import TTLCache
from versioning.cache_keys import CacheKeys
from versioning.compare import sort_versions_desc

logger = logging.getLogger(__name__)

_MISSING = object()
SERVICE_NAME = "Maven Central"


def _coordinate_query(group_id: str, artifact_id: str) -> str:
    return f'g:"{group_id}" AND a:"{artifact_id}"'


def pom_url(group_id: str, artifact_id: str, version: str, base_url: str = Constants.REPO_URL_MAVEN) -> str:
    """Repository path of the POM for one version."""
    group_path = group_id.replace(".", "/")
    return f"{base_url.rstrip('/')}/{group_path}/{artifact_id}/{version}/{artifact_id}-{version}.pom"


class MavenCentralClient:
    """ArtifactRegistry backed by the Maven Central search API and repository."""

    def __init__(
        self,
        http: HttpClient,
        cache: TTLCache,
        search_url: str = Constants.REGISTRY_URL_MAVEN,
        repo_url: str = Constants.REPO_URL_MAVEN,
        max_attempts: int = Constants.HTTP_RETRY_MAX,
        base_delay: float = Constants.HTTP_RETRY_BASE_DELAY_SEC,
    ):
        """Initialize the client.

        Args:
            http: Shared HTTP client.
            cache: Cache consulted before every upstream call.
            search_url: Solr search endpoint.
            repo_url: Repository base for POM downloads.
            max_attempts: Total tries per upstream call.
            base_delay: First backoff delay in seconds.
        """
        self.http = http
        self.cache = cache
        self.search_url = search_url
        self.repo_url = repo_url
        self.max_attempts = max_attempts
        self.base_delay = base_delay

    async def _retry(self, operation, context: str):
        return await with_retry(operation, self.max_attempts, self.base_delay, context)

    async def search_packages(self, query: str, rows: int = 20, start: int = 0) -> Dict[str, Any]:
        """Search Maven Central and return the raw Solr response."""
        cache_key = CacheKeys.upstream_search(query, rows, start)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        params = {"q": query, "rows": str(rows), "start": str(start), "wt": "json"}
        logger.debug(
            "Searching Maven Central",
            extra=extra_context(component="maven_client", query=query, rows=rows, start=start),
        )

        async def _search() -> Dict[str, Any]:
            return await self.http.get_json(self.search_url, service=SERVICE_NAME, params=params)

        data = await self._retry(_search, "Maven Central search")
        if not isinstance(data, dict):
            data = {}
        data.setdefault("response", {})
        data["response"].setdefault("numFound", 0)
        data["response"].setdefault("docs", [])
        self.cache.set(cache_key, data, CacheTTL.SEARCH)
        logger.info(
            "Maven Central search completed",
            extra=extra_context(
                component="maven_client",
                query=query,
                found=data["response"]["numFound"],
                returned=len(data["response"]["docs"]),
            ),
        )
        return data

    async def get_versions(self, group_id: str, artifact_id: str) -> List[str]:
        """Known versions newest first.

        Raises:
            PackageNotFoundError: when the search finds no documents.
        """
        cache_key = CacheKeys.versions(group_id, artifact_id)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return list(cached)

        params = {
            "q": _coordinate_query(group_id, artifact_id),
            "core": "gav",
            "rows": str(Constants.VERSIONS_QUERY_ROWS),
            "wt": "json",
        }

        async def _fetch() -> Dict[str, Any]:
            return await self.http.get_json(self.search_url, service=SERVICE_NAME, params=params)

        data = await self._retry(_fetch, "Maven versions fetch")
        response = (data or {}).get("response", {}) if isinstance(data, dict) else {}
        if not response.get("numFound"):
            raise PackageNotFoundError(f"{group_id}:{artifact_id}")

        raw = []
        for doc in response.get("docs", []):
            if not isinstance(doc, dict):
                continue
            version = doc.get("v") or doc.get("latestVersion")
            if isinstance(version, str) and version.strip():
                raw.append(version.strip())
        versions = sort_versions_desc(raw)

        self.cache.set(cache_key, versions, CacheTTL.VERSIONS)
        logger.debug(
            "Retrieved versions",
            extra=extra_context(component="maven_client", package=f"{group_id}:{artifact_id}", count=len(versions)),
        )
        return list(versions)

    async def get_latest_version(self, group_id: str, artifact_id: str) -> str:
        """Newest known version."""
        versions = await self.get_versions(group_id, artifact_id)
        if not versions:
            raise PackageNotFoundError(f"{group_id}:{artifact_id}")
        return versions[0]

    async def package_exists(self, group_id: str, artifact_id: str) -> bool:
        """Whether Maven Central knows the coordinate at all."""
        cache_key = CacheKeys.package_exists(group_id, artifact_id)
        cached = self.cache.get(cache_key, _MISSING)
        if cached is not _MISSING:
            return bool(cached)

        data = await self.search_packages(_coordinate_query(group_id, artifact_id), 1)
        exists = data["response"]["numFound"] > 0
        self.cache.set(cache_key, exists, CacheTTL.PACKAGE_EXISTS)
        logger.debug(
            "Package existence check",
            extra=extra_context(component="maven_client", package=f"{group_id}:{artifact_id}", exists=exists),
        )
        return exists

    async def get_pom_xml(self, group_id: str, artifact_id: str, version: str) -> str:
        """POM text for one version.

        Raises:
            VersionNotFoundError: when the repository answers 404.
        """
        cache_key = CacheKeys.pom(group_id, artifact_id, version)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        url = pom_url(group_id, artifact_id, version, self.repo_url)

        async def _fetch() -> str:
            try:
                return await self.http.get_text(url, service=SERVICE_NAME)
            except HttpStatusError as exc:
                if exc.status_code == 404:
                    raise VersionNotFoundError(f"{group_id}:{artifact_id}", version) from exc
                raise

        content = await self._retry(_fetch, "POM XML fetch")
        self.cache.set(cache_key, content, CacheTTL.POM)
        logger.debug(
            "POM XML retrieved",
            extra=extra_context(
                component="maven_client",
                package=f"{group_id}:{artifact_id}",
                version=version,
                size=len(content),
            ),
        )
        return content

    async def version_exists(self, group_id: str, artifact_id: str, version: str) -> bool:
        """Whether a POM exists for the version."""
        try:
            await self.get_pom_xml(group_id, artifact_id, version)
        except VersionNotFoundError:
            return False
        return True

    async def first_search_doc(self, group_id: str, artifact_id: str) -> Optional[Dict[str, Any]]:
        """Top search document for a coordinate, used for popularity estimates."""
        data = await self.search_packages(_coordinate_query(group_id, artifact_id), 1)
        docs = data["response"]["docs"]
        return docs[0] if docs else None

"""Explicitly constructed collaborators shared by the tool functions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Optional

from cli_config import LookupConfig
from common.http_client import HttpClient
from common.logging_utils import extra_context
from registry.base import ArtifactRegistry, SourceHost
from registry.maven.client import MavenCentralClient
from repository.github import GitHubClient
from versioning.cache import TTLCache
from versioning.resolvers import MavenVersionResolver

logger = logging.getLogger(__name__)


@dataclass
class LookupServices:
    """One cache, one HTTP session and the clients built on top of them.

    Tests construct this directly with fakes; the CLI and MCP server use
    :meth:`from_config`.
    """

    cache: TTLCache
    registry: ArtifactRegistry
    resolver: MavenVersionResolver
    source_host: Optional[SourceHost] = None
    http: Optional[HttpClient] = None

    @classmethod
    def from_config(cls, config: Optional[LookupConfig] = None) -> "LookupServices":
        config = config or LookupConfig()
        cache = TTLCache(default_ttl=config.cache_ttl, max_entries=config.cache_max_entries)
        http = HttpClient(timeout=config.request_timeout)
        registry = MavenCentralClient(
            http,
            cache,
            max_attempts=config.retry_max_attempts,
            base_delay=config.retry_base_delay,
        )
        github = GitHubClient(
            http,
            cache,
            token=config.github_token,
            max_attempts=config.retry_max_attempts,
            base_delay=config.retry_base_delay,
        )
        logger.debug(
            "Lookup services created",
            extra=extra_context(
                component="services",
                cache_ttl=config.cache_ttl,
                cache_max_entries=config.cache_max_entries,
                timeout=config.request_timeout,
                github_auth=bool(github.token),
            ),
        )
        return cls(
            cache=cache,
            registry=registry,
            resolver=MavenVersionResolver(registry),
            source_host=github,
            http=http,
        )

    async def close(self) -> None:
        if self.http is not None:
            await self.http.stop()

    async def __aenter__(self) -> "LookupServices":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()

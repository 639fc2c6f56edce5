"""GitHub API client used as a best-effort README source.

Supports optional authentication via GITHUB_TOKEN environment variable.
"""
from __future__ import annotations

import logging
import os
import re
import time
from typing import Dict, Optional, Tuple
from urllib.parse import urlsplit

from common.errors import HttpStatusError, PackageNotFoundError, RateLimitError
from common.http_client import HttpClient
from common.logging_utils import extra_context
from common.retry import with_retry
from constants import CacheTTL, Constants
from versioning.cache import TTLCache
from versioning.cache_keys import CacheKeys

logger = logging.getLogger(__name__)

SERVICE_NAME = "GitHub API"
_SSH_RE = re.compile(r"^git@github\.com:([^/]+)/([^/]+?)(?:\.git)?/?$")


def parse_github_url(url: Optional[str]) -> Optional[Tuple[str, str]]:
    """Extract ``(owner, repo)`` from the URL forms found in POM ``<scm>`` blocks.

    Handles ``https://github.com/o/r(.git)``, ``git+https://...``,
    ``scm:git:...`` and ``git@github.com:o/r.git``. Returns None otherwise.
    """
    if not url:
        return None
    url = url.strip()
    if url.startswith("scm:git:"):
        return parse_github_url(url[len("scm:git:"):])
    if url.startswith("git+"):
        return parse_github_url(url[len("git+"):])

    ssh = _SSH_RE.match(url)
    if ssh:
        return ssh.group(1), ssh.group(2)

    try:
        parts = urlsplit(url)
    except ValueError:
        return None
    if (parts.hostname or "").lower() not in ("github.com", "www.github.com"):
        return None
    segments = [s for s in parts.path.split("/") if s]
    if len(segments) < 2:
        return None
    repo = segments[1]
    if repo.endswith(".git"):
        repo = repo[: -len(".git")]
    return segments[0], repo


class GitHubClient:
    """SourceHost implementation for github.com."""

    def __init__(
        self,
        http: HttpClient,
        cache: TTLCache,
        token: Optional[str] = None,
        base_url: Optional[str] = None,
        max_attempts: int = Constants.HTTP_RETRY_MAX,
        base_delay: float = Constants.HTTP_RETRY_BASE_DELAY_SEC,
    ):
        """Initialize GitHub client.

        Args:
            http: Shared HTTP client.
            cache: Cache consulted before every upstream call.
            token: Personal access token (defaults to GITHUB_TOKEN env var).
            base_url: API base URL (defaults to Constants.GITHUB_API_BASE).
            max_attempts: Total tries per upstream call.
            base_delay: First backoff delay in seconds.
        """
        self.http = http
        self.cache = cache
        self.token = token or os.environ.get(Constants.ENV_GITHUB_TOKEN) or None
        self.base_url = (base_url or Constants.GITHUB_API_BASE).rstrip("/")
        self.max_attempts = max_attempts
        self.base_delay = base_delay

    def _get_headers(self, accept: str) -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    @staticmethod
    def _classify(exc: HttpStatusError, owner: str, repo: str) -> Exception:
        """Map GitHub's status conventions onto typed errors."""
        if exc.status_code == 404:
            return PackageNotFoundError(f"{owner}/{repo}")
        if exc.status_code == 403 and exc.headers.get("x-ratelimit-remaining") == "0":
            reset = exc.headers.get("x-ratelimit-reset")
            retry_after = None
            if reset and reset.isdigit():
                retry_after = max(0, int(reset) - int(time.time()))
            return RateLimitError(SERVICE_NAME, retry_after)
        return exc

    async def fetch_readme(self, owner: str, repo: str) -> str:
        """Raw README text of ``owner/repo``.

        Raises:
            PackageNotFoundError: repository or README missing.
            RateLimitError: API quota exhausted after all retries.
        """
        cache_key = CacheKeys.github_readme(owner, repo)
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        url = f"{self.base_url}/repos/{owner}/{repo}/readme"
        logger.debug("Fetching README from GitHub", extra=extra_context(component="github", owner=owner, repo=repo))

        async def _fetch() -> str:
            try:
                return await self.http.get_text(
                    url,
                    service=SERVICE_NAME,
                    headers=self._get_headers("application/vnd.github.v3.raw"),
                )
            except HttpStatusError as exc:
                classified = self._classify(exc, owner, repo)
                if classified is exc:
                    raise
                raise classified from exc

        content = await with_retry(_fetch, self.max_attempts, self.base_delay, "GitHub README fetch")
        self.cache.set(cache_key, content, CacheTTL.GITHUB_README)
        logger.info(
            "GitHub README fetched",
            extra=extra_context(component="github", owner=owner, repo=repo, size=len(content)),
        )
        return content

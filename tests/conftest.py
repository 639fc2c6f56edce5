"""Shared fixtures and fakes for the test suite."""

import os
import sys
from typing import Any, Dict, List, Optional

import pytest

SRC = os.path.join(os.path.dirname(os.path.dirname(os.path.abspath(__file__))), "src")
if SRC not in sys.path:
    sys.path.insert(0, SRC)

from common.errors import HttpStatusError, PackageNotFoundError, VersionNotFoundError  # noqa: E402
from tools.services import LookupServices  # noqa: E402
from versioning.cache import TTLCache  # noqa: E402
from versioning.resolvers import MavenVersionResolver  # noqa: E402


class FakeClock:
    """Manually advanced clock in seconds."""

    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class SleepRecorder:
    def __init__(self):
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class FakeRegistry:
    """In-memory ArtifactRegistry keyed by ``group:artifact``."""

    def __init__(
        self,
        versions: Optional[Dict[str, List[str]]] = None,
        poms: Optional[Dict[str, str]] = None,
        search_docs: Optional[List[Dict[str, Any]]] = None,
        num_found: Optional[int] = None,
    ):
        self.versions = versions or {}
        self.poms = poms or {}
        self.search_docs = search_docs or []
        self.num_found = num_found
        self.calls: List[tuple] = []

    async def package_exists(self, group_id, artifact_id):
        self.calls.append(("package_exists", group_id, artifact_id))
        return f"{group_id}:{artifact_id}" in self.versions

    async def get_versions(self, group_id, artifact_id):
        self.calls.append(("get_versions", group_id, artifact_id))
        key = f"{group_id}:{artifact_id}"
        if key not in self.versions:
            raise PackageNotFoundError(key)
        return list(self.versions[key])

    async def get_latest_version(self, group_id, artifact_id):
        versions = await self.get_versions(group_id, artifact_id)
        if not versions:
            raise PackageNotFoundError(f"{group_id}:{artifact_id}")
        return versions[0]

    async def version_exists(self, group_id, artifact_id, version):
        self.calls.append(("version_exists", group_id, artifact_id, version))
        return version in self.versions.get(f"{group_id}:{artifact_id}", [])

    async def get_pom_xml(self, group_id, artifact_id, version):
        self.calls.append(("get_pom_xml", group_id, artifact_id, version))
        key = f"{group_id}:{artifact_id}:{version}"
        if key not in self.poms:
            raise VersionNotFoundError(f"{group_id}:{artifact_id}", version)
        return self.poms[key]

    async def search_packages(self, query, rows=20, start=0):
        self.calls.append(("search_packages", query, rows, start))
        docs = self.search_docs[start:start + rows]
        found = len(self.search_docs) if self.num_found is None else self.num_found
        return {"response": {"numFound": found, "start": start, "docs": docs}}

    async def first_search_doc(self, group_id, artifact_id):
        self.calls.append(("first_search_doc", group_id, artifact_id))
        for doc in self.search_docs:
            if doc.get("g") == group_id and doc.get("a") == artifact_id:
                return doc
        return None


class FakeSourceHost:
    def __init__(self, readmes: Optional[Dict[str, str]] = None, error: Optional[Exception] = None):
        self.readmes = readmes or {}
        self.error = error
        self.calls: List[tuple] = []

    async def fetch_readme(self, owner, repo):
        self.calls.append((owner, repo))
        if self.error is not None:
            raise self.error
        key = f"{owner}/{repo}"
        if key not in self.readmes:
            raise PackageNotFoundError(key)
        return self.readmes[key]


class FakeHttp:
    """Stand-in for HttpClient returning queued responses per URL substring.

    A queued value that is an exception is raised instead of returned.
    """

    def __init__(self):
        self.routes: List[tuple] = []
        self.requests: List[Dict[str, Any]] = []

    def add(self, url_part: str, *responses: Any) -> None:
        self.routes.append((url_part, list(responses)))

    def _next(self, url: str) -> Any:
        for part, queue in self.routes:
            if part in url and queue:
                value = queue.pop(0) if len(queue) > 1 else queue[0]
                if isinstance(value, BaseException):
                    raise value
                return value
        raise HttpStatusError(404, url, "Not Found")

    async def get_json(self, url, *, service, params=None, headers=None):
        self.requests.append({"url": url, "params": dict(params or {}), "headers": dict(headers or {})})
        return self._next(url)

    async def get_text(self, url, *, service, params=None, headers=None):
        self.requests.append({"url": url, "params": dict(params or {}), "headers": dict(headers or {})})
        return self._next(url)

    async def stop(self):
        return None


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def sleeper():
    return SleepRecorder()


def make_services(registry: FakeRegistry, source_host=None, cache: Optional[TTLCache] = None) -> LookupServices:
    return LookupServices(
        cache=cache or TTLCache(default_ttl=3600, max_entries=100),
        registry=registry,
        resolver=MavenVersionResolver(registry),
        source_host=source_host,
    )

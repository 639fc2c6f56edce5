"""Capability interfaces consumed by the resolver and the tool layer."""
from __future__ import annotations

from typing import Any, Dict, List, Optional, Protocol


class ArtifactRegistry(Protocol):
    """Upstream artifact repository (Maven Central or a test double)."""

    async def package_exists(self, group_id: str, artifact_id: str) -> bool: ...

    async def get_versions(self, group_id: str, artifact_id: str) -> List[str]:
        """Known versions, newest first."""
        ...

    async def get_latest_version(self, group_id: str, artifact_id: str) -> str: ...

    async def version_exists(self, group_id: str, artifact_id: str, version: str) -> bool: ...

    async def get_pom_xml(self, group_id: str, artifact_id: str, version: str) -> str: ...

    async def search_packages(self, query: str, rows: int = 20, start: int = 0) -> Dict[str, Any]: ...

    async def first_search_doc(self, group_id: str, artifact_id: str) -> Optional[Dict[str, Any]]:
        """Top search document for the coordinate, or None."""
        ...


class SourceHost(Protocol):
    """Best-effort README source; never needed to resolve a version."""

    async def fetch_readme(self, owner: str, repo: str) -> str: ...

"""Maven version resolver using Maven version range semantics."""

import logging
from typing import List

from common.errors import PackageNotFoundError, VersionNotFoundError
from common.logging_utils import extra_context
from registry.base import ArtifactRegistry
from ..compare import is_prerelease, matches_range
from ..models import MavenCoordinate, ResolutionMode, VersionSpec
from ..parser import parse_version_spec

logger = logging.getLogger(__name__)


class MavenVersionResolver:
    """Resolve version specs for Maven coordinates against a registry.

    The registry is injected so tests can supply their own; caching and
    retries live in the registry client, so every lookup here is cache-backed.
    """

    def __init__(self, registry: ArtifactRegistry):
        self.registry = registry

    async def resolve_version(self, group_id: str, artifact_id: str, spec: str = "latest") -> str:
        """Resolve ``spec`` to a concrete version of ``group_id:artifact_id``.

        Args:
            group_id: Maven groupId.
            artifact_id: Maven artifactId.
            spec: ``latest``, an exact version, or a bracket range such as
                ``[1.5,2.0)``.

        Returns:
            A version string known to the registry.

        Raises:
            PackageNotFoundError: ``latest`` or a range was asked of a
                coordinate the registry does not know.
            VersionNotFoundError: when no known version satisfies ``spec``.
        """
        return await self.resolve_spec(MavenCoordinate(group_id, artifact_id), parse_version_spec(spec))

    async def resolve_spec(self, coord: MavenCoordinate, spec: VersionSpec) -> str:
        """Resolve an already-parsed spec."""
        ctx = extra_context(
            component="resolver",
            package=coord.name,
            spec=spec.raw,
            mode=spec.mode.value,
        )
        if spec.mode == ResolutionMode.LATEST:
            logger.debug("Resolving latest version", extra=ctx)
            return await self.registry.get_latest_version(coord.group_id, coord.artifact_id)

        if spec.mode == ResolutionMode.RANGE:
            logger.debug("Resolving version range", extra=ctx)
            return await self._pick_range(coord, spec)

        if spec.literal:
            logger.warning("Unknown version specification, trying as literal", extra=ctx)
        else:
            logger.debug("Using specific version", extra=ctx)
        if not await self.registry.version_exists(coord.group_id, coord.artifact_id, spec.raw):
            raise VersionNotFoundError(coord.name, spec.raw)
        return spec.raw

    async def _pick_range(self, coord: MavenCoordinate, spec: VersionSpec) -> str:
        """Return the first, hence highest, known version inside the range."""
        candidates = await self.registry.get_versions(coord.group_id, coord.artifact_id)
        for candidate in candidates:
            if matches_range(candidate, spec):
                return candidate
        raise VersionNotFoundError(coord.name, spec.raw)

    async def get_available_versions(self, group_id: str, artifact_id: str) -> List[str]:
        """All known versions, newest first."""
        return await self.registry.get_versions(group_id, artifact_id)

    async def get_latest_stable_version(self, group_id: str, artifact_id: str) -> str:
        """Newest version that is not a pre-release.

        Falls back to the newest version overall when every version is a
        pre-release.
        """
        versions = await self.registry.get_versions(group_id, artifact_id)
        if not versions:
            raise PackageNotFoundError(f"{group_id}:{artifact_id}")
        for candidate in versions:
            if not is_prerelease(candidate):
                return candidate
        return versions[0]

    @staticmethod
    def is_prerelease(version: str) -> bool:
        """Check if a version is a pre-release (alpha, beta, snapshot, etc.)."""
        return is_prerelease(version)

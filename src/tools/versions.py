"""Version tools: resolve a specifier, list versions, pick the latest stable."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from common.logging_utils import extra_context
from common.validators import validate_package_name, validate_version
from tools.services import LookupServices
from versioning.compare import is_prerelease
from versioning.parser import parse_version_spec

logger = logging.getLogger(__name__)


async def resolve_version(
    services: LookupServices,
    package_name: str,
    version: Optional[str] = "latest",
) -> Dict[str, Any]:
    """Resolve ``version`` (latest, exact or range) to a published version.

    Raises:
        PackageNotFoundError: the coordinate is unknown (latest or range).
        VersionNotFoundError: nothing published satisfies ``version``.
    """
    coord = validate_package_name(package_name)
    spec = parse_version_spec(validate_version(version))
    resolved = await services.resolver.resolve_spec(coord, spec)
    logger.info(
        "Version resolved",
        extra=extra_context(component="versions", package=coord.name, requested=spec.raw, resolved=resolved),
    )
    return {
        "package_name": coord.name,
        "requested": spec.raw,
        "resolved_version": resolved,
        "mode": spec.mode.value,
        "is_prerelease": is_prerelease(resolved),
    }


async def get_available_versions(
    services: LookupServices,
    package_name: str,
    include_prereleases: bool = True,
) -> Dict[str, Any]:
    coord = validate_package_name(package_name)
    versions = await services.resolver.get_available_versions(coord.group_id, coord.artifact_id)
    if not include_prereleases:
        versions = [v for v in versions if not is_prerelease(v)]
    return {
        "package_name": coord.name,
        "versions": versions,
        "count": len(versions),
    }


async def get_latest_stable_version(services: LookupServices, package_name: str) -> Dict[str, Any]:
    """Newest non-pre-release; the newest overall when all are pre-releases."""
    coord = validate_package_name(package_name)
    version = await services.resolver.get_latest_stable_version(coord.group_id, coord.artifact_id)
    return {
        "package_name": coord.name,
        "version": version,
        "is_prerelease": is_prerelease(version),
    }

"""get_package_info tool: latest version, license, dependencies and popularity."""

from __future__ import annotations

import logging
import time
from typing import Any, Dict, Optional

from common.errors import LookupServiceError
from common.logging_utils import extra_context
from common.validators import validate_package_name
from constants import CacheTTL
from registry.maven.pom import parse_pom_xml, split_dependencies
from tools.services import LookupServices
from tools.views import build_repository
from versioning.cache_keys import CacheKeys

logger = logging.getLogger(__name__)

_EMPTY_STATS = {"last_day": 0, "last_week": 0, "last_month": 0}


async def estimate_download_stats(
    services: LookupServices,
    group_id: str,
    artifact_id: str,
    now_ms: Optional[float] = None,
) -> Dict[str, int]:
    """Rough activity figures derived from the age of the latest upload.

    Maven Central publishes no download counts; on any lookup failure the
    result is all zeros.
    """
    try:
        doc = await services.registry.first_search_doc(group_id, artifact_id)
    except LookupServiceError as exc:
        logger.warning(
            "Failed to estimate download stats",
            extra=extra_context(component="package_info", package=f"{group_id}:{artifact_id}", error=str(exc)),
        )
        return dict(_EMPTY_STATS)

    timestamp = (doc or {}).get("timestamp")
    if not isinstance(timestamp, (int, float)) or isinstance(timestamp, bool):
        return dict(_EMPTY_STATS)
    now = time.time() * 1000 if now_ms is None else now_ms
    base = max(1, int((now - timestamp) // 86_400_000))
    return {
        "last_day": int(base * 0.1),
        "last_week": int(base * 0.7),
        "last_month": base,
    }


async def get_package_info(
    services: LookupServices,
    package_name: str,
    include_dependencies: bool = True,
    include_dev_dependencies: bool = False,
) -> Dict[str, Any]:
    """Summary of the latest release of ``package_name``.

    Raises:
        InvalidPackageNameError: malformed coordinate.
        PackageNotFoundError: Maven Central has no such coordinate.
    """
    coord = validate_package_name(package_name)
    group_id, artifact_id = coord.group_id, coord.artifact_id

    cache_key = CacheKeys.package_info(group_id, artifact_id)
    cached = services.cache.get(cache_key)
    if cached is not None:
        logger.debug("Returning cached package info", extra=extra_context(component="package_info", package=coord.name))
        return _with_dependencies(cached, include_dependencies, include_dev_dependencies)

    logger.info("Getting package info", extra=extra_context(component="package_info", package=coord.name))

    latest = await services.resolver.resolve_version(group_id, artifact_id, "latest")
    pom = parse_pom_xml(await services.registry.get_pom_xml(group_id, artifact_id, latest))
    deps = split_dependencies(pom, include_dependencies=True, include_test_dependencies=True)

    organization = pom.organization
    if not organization:
        organization = next((d.organization for d in pom.developers if d.organization), None)

    result = {
        "package_name": coord.name,
        "latest_version": latest,
        "description": pom.description or "No description available",
        "organization": organization or "Unknown",
        "license": pom.license,
        "keywords": [],
        "dependencies": deps["dependencies"],
        "test_dependencies": deps["test_dependencies"],
        "download_stats": await estimate_download_stats(services, group_id, artifact_id),
        "repository": build_repository(pom),
    }
    services.cache.set(cache_key, result, CacheTTL.PACKAGE_INFO)
    logger.info(
        "Package info retrieved",
        extra=extra_context(
            component="package_info",
            package=coord.name,
            version=latest,
            dependencies=len(deps["dependencies"] or {}),
            test_dependencies=len(deps["test_dependencies"] or {}),
        ),
    )
    return _with_dependencies(result, include_dependencies, include_dev_dependencies)


def _with_dependencies(result: Dict[str, Any], include_deps: bool, include_test_deps: bool) -> Dict[str, Any]:
    """Cached entries carry both dependency maps; hide the ones not requested."""
    view = dict(result)
    if not include_deps:
        view["dependencies"] = None
    if not include_test_deps:
        view["test_dependencies"] = None
    return view

"""get_package_readme tool: README, usage examples and install snippets."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from common.errors import LookupServiceError, PackageNotFoundError, VersionNotFoundError
from common.logging_utils import extra_context
from common.validators import validate_package_name, validate_version
from constants import CacheTTL
from registry.maven.pom import PomInfo, parse_pom_xml
from repository.github import parse_github_url
from repository.readme_parser import (
    clean_readme_content,
    extract_title,
    extract_usage_examples,
    generate_basic_readme,
)
from tools.services import LookupServices
from tools.views import build_basic_info, build_installation, build_repository, missing_package_info
from versioning.cache_keys import CacheKeys
from versioning.parser import parse_version_spec

logger = logging.getLogger(__name__)


async def _readme_text(services: LookupServices, group_id: str, artifact_id: str, pom: PomInfo) -> str:
    """GitHub README when the POM points at GitHub, otherwise one built from the POM."""
    location = parse_github_url(pom.scm_url or pom.url)
    if location is not None and services.source_host is not None:
        owner, repo = location
        try:
            content = await services.source_host.fetch_readme(owner, repo)
        except LookupServiceError as exc:
            logger.warning(
                "Failed to fetch README from GitHub",
                extra=extra_context(component="readme", owner=owner, repo=repo, error=str(exc)),
            )
        else:
            if content:
                return content

    logger.debug(
        "Generated basic README from POM data",
        extra=extra_context(component="readme", package=f"{group_id}:{artifact_id}"),
    )
    return generate_basic_readme(group_id, artifact_id, pom.name, pom.description, pom.url)


def _with_examples(result: Dict[str, Any], include_examples: bool) -> Dict[str, Any]:
    """Cached entries always carry examples; drop them when not requested."""
    if include_examples:
        return result
    return {**result, "usage_examples": []}


def _not_found(group_id: str, artifact_id: str, version: str) -> Dict[str, Any]:
    return {
        "package_name": f"{group_id}:{artifact_id}",
        "version": version,
        "description": "Package not found",
        "readme_content": "",
        "usage_examples": [],
        "installation": build_installation(group_id, artifact_id, version),
        "basic_info": missing_package_info(group_id, artifact_id, version),
        "repository": None,
        "exists": False,
    }


async def get_package_readme(
    services: LookupServices,
    package_name: str,
    version: Optional[str] = "latest",
    include_examples: bool = True,
) -> Dict[str, Any]:
    """README content and usage for ``package_name`` at ``version``.

    ``version`` may be ``latest``, an exact version or a range. A package or
    version that does not exist yields ``exists: False`` rather than an error;
    transport failures still raise.
    """
    coord = validate_package_name(package_name)
    version = validate_version(version)
    group_id, artifact_id = coord.group_id, coord.artifact_id

    cache_key = CacheKeys.package_readme(group_id, artifact_id, version)
    cached = services.cache.get(cache_key)
    if cached is not None:
        logger.debug("Returning cached README", extra=extra_context(component="readme", package=coord.name))
        return _with_examples(cached, include_examples)

    logger.info(
        "Getting package README",
        extra=extra_context(component="readme", package=coord.name, version=version, examples=include_examples),
    )

    try:
        if not await services.registry.package_exists(group_id, artifact_id):
            raise PackageNotFoundError(coord.name)
        resolved = await services.resolver.resolve_spec(coord, parse_version_spec(version))
        pom = parse_pom_xml(await services.registry.get_pom_xml(group_id, artifact_id, resolved))
    except (PackageNotFoundError, VersionNotFoundError) as exc:
        logger.debug("Package not found", extra=extra_context(component="readme", package=coord.name, error=str(exc)))
        return _not_found(group_id, artifact_id, version)

    readme = await _readme_text(services, group_id, artifact_id, pom)
    examples = extract_usage_examples(readme)
    basic_info = build_basic_info(group_id, artifact_id, resolved, pom)

    result = {
        "package_name": coord.name,
        "version": resolved,
        "description": pom.description or extract_title(readme) or basic_info["description"],
        "readme_content": clean_readme_content(readme),
        "usage_examples": [example.to_dict() for example in examples],
        "installation": build_installation(group_id, artifact_id, resolved),
        "basic_info": basic_info,
        "repository": build_repository(pom),
        "exists": True,
    }
    services.cache.set(cache_key, result, CacheTTL.PACKAGE_README)
    logger.info(
        "Package README retrieved",
        extra=extra_context(
            component="readme",
            package=coord.name,
            version=resolved,
            readme_length=len(readme),
            examples=len(examples),
        ),
    )
    return _with_examples(result, include_examples)

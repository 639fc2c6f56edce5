"""MCP server for maven-lookup exposing the lookup tools via the official MCP Python SDK.

Tools:
  - get_readme_from_maven
  - get_package_info_from_maven
  - search_packages_from_maven
  - resolve_version_from_maven
  - get_versions_from_maven

Transport defaults to stdio JSON-RPC. If --host/--port are provided via CLI,
we'll run with streamable HTTP transport instead.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from mcp.server.fastmcp import FastMCP

from cli_config import LookupConfig
from common.errors import LookupServiceError
from common.logging_utils import Timer, extra_context
from mcp_schemas import (
    GET_PACKAGE_INFO_INPUT,
    GET_PACKAGE_README_INPUT,
    GET_VERSIONS_INPUT,
    RESOLVE_VERSION_INPUT,
    RESOLVE_VERSION_OUTPUT,
    SEARCH_PACKAGES_INPUT,
    SEARCH_PACKAGES_OUTPUT,
)
from mcp_validate import safe_validate_output, strip_unset, validate_input
from tools import (
    LookupServices,
    get_available_versions,
    get_latest_stable_version,
    get_package_info,
    get_package_readme,
    resolve_version,
    search_packages,
)

logger = logging.getLogger(__name__)

SERVER_NAME = "maven-lookup-mcp"


def _tool_error(tool: str, exc: LookupServiceError) -> RuntimeError:
    logger.error(
        "Tool %s failed: %s",
        tool,
        exc.message,
        extra=extra_context(event="tool_failed", component="mcp", tool=tool, code=exc.code),
    )
    return RuntimeError(f"[{exc.code}] {exc.message}")


async def _invoke(tool: str, schema: Dict[str, Any], arguments: Dict[str, Any], call) -> Dict[str, Any]:
    """Validate ``arguments`` against ``schema``, run ``call`` and map typed errors."""
    arguments = strip_unset(arguments)
    with Timer() as t:
        try:
            validate_input(schema, arguments)
            result = await call(**arguments)
        except LookupServiceError as exc:
            raise _tool_error(tool, exc) from exc
    logger.info(
        "Tool %s completed",
        tool,
        extra=extra_context(event="tool_completed", component="mcp", tool=tool, duration_ms=t.duration_ms()),
    )
    return result


async def handle_get_readme(
    services: LookupServices,
    package_name: str,
    version: Optional[str] = None,
    include_examples: Optional[bool] = None,
) -> Dict[str, Any]:
    async def _call(**kwargs):
        return await get_package_readme(services, **kwargs)

    return await _invoke(
        "get_readme_from_maven",
        GET_PACKAGE_README_INPUT,
        {"package_name": package_name, "version": version, "include_examples": include_examples},
        _call,
    )


async def handle_get_package_info(
    services: LookupServices,
    package_name: str,
    include_dependencies: Optional[bool] = None,
    include_dev_dependencies: Optional[bool] = None,
) -> Dict[str, Any]:
    async def _call(**kwargs):
        return await get_package_info(services, **kwargs)

    return await _invoke(
        "get_package_info_from_maven",
        GET_PACKAGE_INFO_INPUT,
        {
            "package_name": package_name,
            "include_dependencies": include_dependencies,
            "include_dev_dependencies": include_dev_dependencies,
        },
        _call,
    )


async def handle_search_packages(
    services: LookupServices,
    query: str,
    limit: Optional[int] = None,
    quality: Optional[float] = None,
    popularity: Optional[float] = None,
) -> Dict[str, Any]:
    async def _call(**kwargs):
        return await search_packages(services, **kwargs)

    result = await _invoke(
        "search_packages_from_maven",
        SEARCH_PACKAGES_INPUT,
        {"query": query, "limit": limit, "quality": quality, "popularity": popularity},
        _call,
    )
    safe_validate_output(SEARCH_PACKAGES_OUTPUT, result)
    return result


async def handle_resolve_version(
    services: LookupServices,
    package_name: str,
    version: Optional[str] = None,
) -> Dict[str, Any]:
    async def _call(**kwargs):
        return await resolve_version(services, **kwargs)

    result = await _invoke(
        "resolve_version_from_maven",
        RESOLVE_VERSION_INPUT,
        {"package_name": package_name, "version": version},
        _call,
    )
    safe_validate_output(RESOLVE_VERSION_OUTPUT, result)
    return result


async def handle_get_versions(
    services: LookupServices,
    package_name: str,
    include_prereleases: Optional[bool] = None,
) -> Dict[str, Any]:
    async def _call(package_name: str, include_prereleases: bool = True):
        listing = await get_available_versions(services, package_name, include_prereleases)
        stable = await get_latest_stable_version(services, package_name)
        listing["latest_stable"] = stable["version"]
        return listing

    return await _invoke(
        "get_versions_from_maven",
        GET_VERSIONS_INPUT,
        {"package_name": package_name, "include_prereleases": include_prereleases},
        _call,
    )


def build_server(services: LookupServices, name: str = SERVER_NAME) -> FastMCP:
    """Create the FastMCP app with every tool bound to ``services``."""

    @asynccontextmanager
    async def _lifespan(_server: FastMCP) -> AsyncIterator[None]:
        try:
            yield
        finally:
            await services.close()

    mcp = FastMCP(name, lifespan=_lifespan)

    @mcp.tool(name="get_readme_from_maven", title="Get README from Maven")
    async def get_readme_from_maven(
        package_name: str,
        version: Optional[str] = None,
        include_examples: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """README, usage examples and installation snippets for a Maven package (groupId:artifactId)."""
        return await handle_get_readme(services, package_name, version, include_examples)

    @mcp.tool(name="get_package_info_from_maven", title="Get Package Info from Maven")
    async def get_package_info_from_maven(
        package_name: str,
        include_dependencies: Optional[bool] = None,
        include_dev_dependencies: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Latest version, license, organization and dependencies of a Maven package."""
        return await handle_get_package_info(services, package_name, include_dependencies, include_dev_dependencies)

    @mcp.tool(name="search_packages_from_maven", title="Search Packages on Maven Central")
    async def search_packages_from_maven(
        query: str,
        limit: Optional[int] = None,
        quality: Optional[float] = None,
        popularity: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Search Maven Central; quality and popularity are optional minimum scores in [0, 1]."""
        return await handle_search_packages(services, query, limit, quality, popularity)

    @mcp.tool(name="resolve_version_from_maven", title="Resolve Version on Maven Central")
    async def resolve_version_from_maven(
        package_name: str,
        version: Optional[str] = None,
    ) -> Dict[str, Any]:
        """Resolve latest, an exact version or a range like [1.5,2.0) to a published version."""
        return await handle_resolve_version(services, package_name, version)

    @mcp.tool(name="get_versions_from_maven", title="List Versions on Maven Central")
    async def get_versions_from_maven(
        package_name: str,
        include_prereleases: Optional[bool] = None,
    ) -> Dict[str, Any]:
        """Published versions newest first, plus the latest stable version."""
        return await handle_get_versions(services, package_name, include_prereleases)

    return mcp


def run_mcp_server(args, config: Optional[LookupConfig] = None) -> None:
    services = LookupServices.from_config(config or LookupConfig())
    mcp = build_server(services)

    host = getattr(args, "MCP_HOST", None)
    port = getattr(args, "MCP_PORT", None)
    if host and port:
        mcp.settings.host = host
        mcp.settings.port = int(port)
        logger.info("Starting MCP server on http://%s:%s", host, port)
        mcp.run(transport="streamable-http")
    else:
        logger.info("Starting MCP server on stdio")
        mcp.run()  # defaults to stdio

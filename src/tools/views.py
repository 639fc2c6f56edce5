"""Response fragments shared by the README and package-info tools."""

from __future__ import annotations

from typing import Any, Dict, Optional

from registry.maven.pom import PomInfo


def build_installation(group_id: str, artifact_id: str, version: str) -> Dict[str, str]:
    return {
        "maven": (
            "<dependency>\n"
            f"    <groupId>{group_id}</groupId>\n"
            f"    <artifactId>{artifact_id}</artifactId>\n"
            f"    <version>{version}</version>\n"
            "</dependency>"
        ),
        "gradle": f"implementation '{group_id}:{artifact_id}:{version}'",
        "sbt": f'libraryDependencies += "{group_id}" % "{artifact_id}" % "{version}"',
    }


def build_repository(pom: PomInfo) -> Optional[Dict[str, str]]:
    """SCM url when present (assumed git), else the project homepage."""
    if pom.scm_url:
        return {"type": "git", "url": pom.scm_url}
    if pom.url:
        return {"type": "unknown", "url": pom.url}
    return None


def build_basic_info(group_id: str, artifact_id: str, version: str, pom: PomInfo) -> Dict[str, Any]:
    return {
        "groupId": group_id,
        "artifactId": artifact_id,
        "version": version,
        "description": pom.description or "No description available",
        "packaging": pom.packaging or "jar",
        "homepage": pom.url,
        "license": pom.license,
        "organization": pom.organization,
        "developers": [
            {"name": dev.name or "Unknown", "email": dev.email, "url": dev.url}
            for dev in pom.developers
        ],
        "keywords": [],
    }


def missing_package_info(group_id: str, artifact_id: str, version: str) -> Dict[str, Any]:
    return {
        "groupId": group_id,
        "artifactId": artifact_id,
        "version": version,
        "description": "Package not found",
        "license": "Unknown",
        "keywords": [],
    }

"""POM (project object model) parsing.

Only the fields the tool layer reports are extracted. Values missing from the
project element fall back to ``<parent>`` where Maven itself would inherit
them (groupId and version).
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)


@dataclass
class PomDependency:
    group_id: str
    artifact_id: str
    version: Optional[str] = None
    scope: Optional[str] = None
    optional: bool = False

    @property
    def name(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass
class PomDeveloper:
    name: Optional[str] = None
    email: Optional[str] = None
    url: Optional[str] = None
    organization: Optional[str] = None


@dataclass
class PomInfo:
    """Subset of a POM used for package info and README responses."""

    group_id: Optional[str] = None
    artifact_id: Optional[str] = None
    version: Optional[str] = None
    packaging: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    url: Optional[str] = None
    licenses: List[str] = field(default_factory=list)
    developers: List[PomDeveloper] = field(default_factory=list)
    organization: Optional[str] = None
    scm_url: Optional[str] = None
    dependencies: List[PomDependency] = field(default_factory=list)

    @property
    def license(self) -> str:
        return ", ".join(self.licenses) if self.licenses else "Unknown"


def _strip_namespaces(root: ET.Element) -> None:
    for elem in root.iter():
        if isinstance(elem.tag, str) and "}" in elem.tag:
            elem.tag = elem.tag.split("}", 1)[1]


def _text(parent: Optional[ET.Element], path: str) -> Optional[str]:
    if parent is None:
        return None
    node = parent.find(path)
    if node is None or node.text is None:
        return None
    value = node.text.strip()
    return value or None


def _dependencies(project: ET.Element) -> List[PomDependency]:
    deps: List[PomDependency] = []
    # dependencyManagement entries are constraints, not declared dependencies
    for dep in project.findall("dependencies/dependency"):
        group_id = _text(dep, "groupId")
        artifact_id = _text(dep, "artifactId")
        if not group_id or not artifact_id:
            continue
        deps.append(
            PomDependency(
                group_id=group_id,
                artifact_id=artifact_id,
                version=_text(dep, "version"),
                scope=_text(dep, "scope"),
                optional=(_text(dep, "optional") or "").lower() == "true",
            )
        )
    return deps


def parse_pom_xml(content: str) -> PomInfo:
    """Parse POM text; malformed XML yields an empty PomInfo."""
    try:
        root = ET.fromstring(content)
    except ET.ParseError as exc:
        logger.warning("Failed to parse POM XML: %s", exc)
        return PomInfo()

    _strip_namespaces(root)
    parent = root.find("parent")
    developers = [
        PomDeveloper(
            name=_text(dev, "name"),
            email=_text(dev, "email"),
            url=_text(dev, "url"),
            organization=_text(dev, "organization"),
        )
        for dev in root.findall("developers/developer")
    ]
    licenses = [
        name for name in (_text(lic, "name") for lic in root.findall("licenses/license")) if name
    ]
    return PomInfo(
        group_id=_text(root, "groupId") or _text(parent, "groupId"),
        artifact_id=_text(root, "artifactId"),
        version=_text(root, "version") or _text(parent, "version"),
        packaging=_text(root, "packaging"),
        name=_text(root, "name"),
        description=_text(root, "description"),
        url=_text(root, "url"),
        licenses=licenses,
        developers=developers,
        organization=_text(root, "organization/name"),
        scm_url=_text(root, "scm/url"),
        dependencies=_dependencies(root),
    )


def split_dependencies(
    pom: PomInfo,
    include_dependencies: bool = True,
    include_test_dependencies: bool = False,
) -> Dict[str, Optional[Dict[str, str]]]:
    """Map runtime and test dependencies to ``{"group:artifact": version}``.

    Runtime means no scope, ``compile`` or ``runtime``. Dependencies without
    an explicit version (managed by a parent or BOM) are left out.
    """
    deps: Optional[Dict[str, str]] = None
    test_deps: Optional[Dict[str, str]] = None
    if include_dependencies:
        deps = {
            d.name: d.version
            for d in pom.dependencies
            if d.version and (d.scope is None or d.scope in ("compile", "runtime"))
        }
    if include_test_dependencies:
        test_deps = {d.name: d.version for d in pom.dependencies if d.version and d.scope == "test"}
    return {"dependencies": deps, "test_dependencies": test_deps}

"""Token parsing utilities for coordinates and version specs."""

import re
from typing import Optional, Tuple

from common.errors import InvalidPackageNameError
from .models import MavenCoordinate, RangeBound, ResolutionMode, VersionSpec

EXACT_VERSION_RE = re.compile(r"^[0-9]+(\.[0-9]+)*(-[a-zA-Z0-9.-]+)?$")
_COORDINATE_PART_RE = re.compile(r"^[a-zA-Z0-9._-]+$")


def tokenize_rightmost_colon(s: str) -> Tuple[str, Optional[str]]:
    """Return (identifier, spec or None) using the rightmost-colon rule.

    ``org.slf4j:slf4j-api`` has no spec; ``org.slf4j:slf4j-api:2.0.9`` does.
    """
    s = s.strip()
    if s.count(':') <= 1:
        return s, None
    parts = s.rsplit(':', 1)
    identifier = parts[0].strip()
    spec_part = parts[1].strip() if len(parts) > 1 else ''
    spec = spec_part if spec_part else None
    return identifier, spec


def parse_coordinate(package_name: str) -> MavenCoordinate:
    """Split ``groupId:artifactId`` into a coordinate.

    Raises:
        InvalidPackageNameError: when the text is not exactly two valid parts.
    """
    if not isinstance(package_name, str) or not package_name.strip():
        raise InvalidPackageNameError(package_name)
    parts = package_name.strip().split(':')
    if len(parts) != 2:
        raise InvalidPackageNameError(package_name)
    group_id, artifact_id = parts
    if not _COORDINATE_PART_RE.match(group_id) or not _COORDINATE_PART_RE.match(artifact_id):
        raise InvalidPackageNameError(package_name)
    return MavenCoordinate(group_id=group_id, artifact_id=artifact_id)


def is_range(spec: str) -> bool:
    """Bracket or parenthesis at both ends, with something in between."""
    return len(spec) >= 3 and spec[0] in '[(' and spec[-1] in '])'


def _parse_range(spec: str) -> VersionSpec:
    inner = spec[1:-1]
    if ',' in inner:
        lower_text, upper_text = inner.split(',', 1)
    else:
        # no comma: "[1.2]" is a lower bound only
        lower_text, upper_text = inner, ''
    lower_text = lower_text.strip()
    upper_text = upper_text.strip()
    lower = RangeBound(value=lower_text or None, inclusive=spec[0] == '[')
    upper = RangeBound(value=upper_text or None, inclusive=spec[-1] == ']')
    return VersionSpec(raw=spec, mode=ResolutionMode.RANGE, lower=lower, upper=upper)


def parse_version_spec(raw: Optional[str]) -> VersionSpec:
    """Classify a user-supplied version string.

    ``None``, empty and ``latest`` select the newest version; a plain
    numeric-dot version (optionally with a ``-suffix``) is exact; bracket
    notation is a range; anything else is checked literally.
    """
    text = (raw or '').strip()
    if not text or text == 'latest':
        return VersionSpec(raw='latest', mode=ResolutionMode.LATEST)
    if EXACT_VERSION_RE.match(text):
        return VersionSpec(raw=text, mode=ResolutionMode.EXACT)
    if is_range(text):
        return _parse_range(text)
    return VersionSpec(raw=text, mode=ResolutionMode.EXACT, literal=True)

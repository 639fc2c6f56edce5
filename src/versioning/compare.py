"""Version comparison and classification helpers.

The ordering is deliberately simpler than semantic versioning: numeric
components are compared pairwise (missing components count as zero), a
release outranks any suffixed build with the same numbers, and two suffixes
are compared as plain strings. Existing callers rely on this exact order.
"""
from __future__ import annotations

import functools
import re
from typing import Iterable, List

from .models import ParsedVersion, RangeBound, VersionSpec

_VERSION_RE = re.compile(r"^(\d+(?:\.\d+)*)(.*)$")

PRERELEASE_KEYWORDS = (
    "alpha", "beta", "rc", "snapshot", "milestone", "cr", "pr",
    "dev", "preview", "early", "experimental",
)


def parse_version(version: str) -> ParsedVersion:
    """Split ``version`` into numeric components and a suffix.

    A string without leading digits parses to ``(0,)`` with the whole string
    as suffix.
    """
    match = _VERSION_RE.match(version)
    if not match:
        return ParsedVersion(numbers=(0,), suffix=version)
    numbers = tuple(int(part) for part in match.group(1).split("."))
    return ParsedVersion(numbers=numbers, suffix=match.group(2) or "")


def compare_versions(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` is lower than, equal to or higher than ``b``."""
    left = parse_version(a)
    right = parse_version(b)

    width = max(len(left.numbers), len(right.numbers))
    for i in range(width):
        num_a = left.numbers[i] if i < len(left.numbers) else 0
        num_b = right.numbers[i] if i < len(right.numbers) else 0
        if num_a != num_b:
            return 1 if num_a > num_b else -1

    if left.suffix == right.suffix:
        return 0
    if not left.suffix:
        return 1
    if not right.suffix:
        return -1
    return 1 if left.suffix > right.suffix else -1


def sort_versions_desc(versions: Iterable[str]) -> List[str]:
    """Distinct versions, newest first, keeping first-seen order for ties."""
    seen = set()
    unique = []
    for v in versions:
        if v not in seen:
            seen.add(v)
            unique.append(v)
    return sorted(unique, key=functools.cmp_to_key(compare_versions), reverse=True)


def _satisfies_lower(version: str, bound: RangeBound) -> bool:
    if bound.value is None:
        return True
    cmp = compare_versions(version, bound.value)
    return cmp >= 0 if bound.inclusive else cmp > 0


def _satisfies_upper(version: str, bound: RangeBound) -> bool:
    if bound.value is None:
        return True
    cmp = compare_versions(version, bound.value)
    return cmp <= 0 if bound.inclusive else cmp < 0


def matches_range(version: str, spec: VersionSpec) -> bool:
    """True when ``version`` lies within every present bound of ``spec``."""
    if spec.lower is not None and not _satisfies_lower(version, spec.lower):
        return False
    if spec.upper is not None and not _satisfies_upper(version, spec.upper):
        return False
    return True


def is_prerelease(version: str) -> bool:
    """Keyword check on the lowercased version (``1.0-RC1``, ``2.0-SNAPSHOT``)."""
    lowered = version.lower()
    return any(keyword in lowered for keyword in PRERELEASE_KEYWORDS)

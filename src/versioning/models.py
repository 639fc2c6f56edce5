"""Data models for versioning and package resolution."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class ResolutionMode(Enum):
    """Resolution strategy derived from a version specifier."""
    LATEST = "latest"
    EXACT = "exact"
    RANGE = "range"


@dataclass(frozen=True)
class RangeBound:
    """One edge of a version range; ``value`` None means unbounded."""
    value: Optional[str]
    inclusive: bool


@dataclass(frozen=True)
class VersionSpec:
    """A version spec classified once into exactly one resolution mode.

    ``lower``/``upper`` are only set for RANGE. ``literal`` marks specs that did
    not look like a version at all and are checked for existence verbatim.
    """
    raw: str
    mode: ResolutionMode
    lower: Optional[RangeBound] = None
    upper: Optional[RangeBound] = None
    literal: bool = False


@dataclass(frozen=True)
class ParsedVersion:
    """Numeric-dot prefix and trailing suffix of a version string."""
    numbers: Tuple[int, ...]
    suffix: str


@dataclass(frozen=True)
class MavenCoordinate:
    """Artifact coordinate: the (groupId, artifactId) pair."""
    group_id: str
    artifact_id: str

    @property
    def name(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    def __str__(self) -> str:
        return self.name

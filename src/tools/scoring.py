"""Heuristic quality, popularity and maintenance scores for search results.

Maven Central publishes no download or quality metrics, so every score is
derived from the search document alone: the groupId, the version string and
the ``timestamp`` (epoch milliseconds) of the latest upload.
"""

from __future__ import annotations

import re
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

WELL_KNOWN_GROUPS = (
    "org.springframework", "com.google", "org.apache", "com.fasterxml",
    "org.eclipse", "com.squareup", "io.netty", "org.hibernate",
    "org.slf4j", "ch.qos.logback", "junit", "org.junit",
    "org.mockito", "com.github.ben-manes.caffeine",
)

COMMON_ARTIFACTS = frozenset({
    "spring-core", "spring-boot", "guava", "jackson-core",
    "slf4j-api", "logback-classic", "junit-jupiter", "mockito-core",
})

_SEMVER_RE = re.compile(r"^\d+\.\d+\.\d+$")
_MS_PER_DAY = 1000 * 60 * 60 * 24


@dataclass(frozen=True)
class PackageScore:
    final: float
    quality: float
    popularity: float
    maintenance: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "final": self.final,
            "detail": {
                "quality": self.quality,
                "popularity": self.popularity,
                "maintenance": self.maintenance,
            },
        }


def _now_ms() -> float:
    return time.time() * 1000


def _clamp(score: float) -> float:
    return max(0.0, min(1.0, score))


def days_since_update(doc: Mapping[str, Any], now_ms: Optional[float] = None) -> Optional[float]:
    timestamp = doc.get("timestamp")
    if not isinstance(timestamp, (int, float)) or isinstance(timestamp, bool) or timestamp <= 0:
        return None
    now = _now_ms() if now_ms is None else now_ms
    return (now - timestamp) / _MS_PER_DAY


def quality_score(doc: Mapping[str, Any]) -> float:
    score = 0.5
    group_id = doc.get("g") or ""
    version = doc.get("v") or doc.get("latestVersion") or ""

    if any(group_id.startswith(org) for org in WELL_KNOWN_GROUPS):
        score += 0.3
    # reverse-domain groupId
    if "." in group_id:
        score += 0.1
    if "SNAPSHOT" in version:
        score -= 0.1
    if _SEMVER_RE.match(version):
        score += 0.1
    return _clamp(score)


def popularity_score(doc: Mapping[str, Any], now_ms: Optional[float] = None) -> float:
    score = 0.3
    days = days_since_update(doc, now_ms)
    if days is not None:
        if days < 30:
            score += 0.4
        elif days < 180:
            score += 0.3
        elif days < 365:
            score += 0.2
        elif days < 730:
            score += 0.1
    if doc.get("a") in COMMON_ARTIFACTS:
        score += 0.3
    return _clamp(score)


def maintenance_score(doc: Mapping[str, Any], now_ms: Optional[float] = None) -> float:
    days = days_since_update(doc, now_ms)
    if days is None:
        return 0.2
    if days < 30:
        return 1.0
    if days < 90:
        return 0.8
    if days < 365:
        return 0.6
    if days < 730:
        return 0.4
    return 0.2


def score_package(doc: Mapping[str, Any], now_ms: Optional[float] = None) -> PackageScore:
    """Weighted blend: 30% quality, 40% popularity, 30% maintenance."""
    quality = quality_score(doc)
    popularity = popularity_score(doc, now_ms)
    maintenance = maintenance_score(doc, now_ms)
    final = quality * 0.3 + popularity * 0.4 + maintenance * 0.3
    return PackageScore(
        final=round(final, 2),
        quality=round(quality, 2),
        popularity=round(popularity, 2),
        maintenance=round(maintenance, 2),
    )


def extract_organization(group_id: Optional[str]) -> str:
    """``com.google.guava`` -> ``com.google``; single-segment ids are returned as-is."""
    if not group_id:
        return "Unknown"
    parts = group_id.split(".")
    if len(parts) >= 2 and parts[0] in ("com", "org", "net", "io"):
        return ".".join(parts[:2])
    return parts[0] or "Unknown"


def extract_description(doc: Mapping[str, Any]) -> str:
    text = doc.get("text")
    if isinstance(text, list):
        for candidate in text:
            if isinstance(candidate, str) and len(candidate) > 10 and ":" not in candidate and "/" not in candidate:
                return candidate
    return f"Maven package {doc.get('g')}:{doc.get('a')}"

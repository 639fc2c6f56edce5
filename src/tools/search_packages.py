"""search_packages tool: free-text Maven Central search with heuristic scores."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from common.logging_utils import extra_context
from common.validators import validate_limit, validate_score, validate_search_query
from constants import CacheTTL
from tools.scoring import extract_description, extract_organization, score_package
from tools.services import LookupServices
from versioning.cache_keys import CacheKeys

logger = logging.getLogger(__name__)


def _to_result(doc: Dict[str, Any], now_ms: Optional[float]) -> Dict[str, Any]:
    score = score_package(doc, now_ms)
    return {
        "groupId": doc.get("g"),
        "artifactId": doc.get("a"),
        "version": doc.get("v") or doc.get("latestVersion") or "unknown",
        "description": extract_description(doc),
        "keywords": list(doc.get("tags") or []),
        "organization": extract_organization(doc.get("g")),
        "repositoryId": "central",
        "score": score.to_dict(),
        "searchScore": score.final,
    }


async def search_packages(
    services: LookupServices,
    query: str,
    limit: Optional[int] = None,
    quality: Optional[float] = None,
    popularity: Optional[float] = None,
    now_ms: Optional[float] = None,
) -> Dict[str, Any]:
    """Search and keep results whose quality/popularity meet the given minimums.

    ``total`` counts the packages returned after filtering, capped by the
    upstream hit count.
    """
    query = validate_search_query(query)
    limit = validate_limit(limit)
    quality = validate_score(quality, "quality")
    popularity = validate_score(popularity, "popularity")

    cache_key = CacheKeys.search(query, limit, quality, popularity)
    cached = services.cache.get(cache_key)
    if cached is not None:
        logger.debug("Returning cached search results", extra=extra_context(component="search", query=query))
        return cached

    data = await services.registry.search_packages(query, limit)
    response = data.get("response", {})
    docs = [d for d in response.get("docs", []) if isinstance(d, dict)]
    packages: List[Dict[str, Any]] = [_to_result(doc, now_ms) for doc in docs]

    filtered = [
        pkg
        for pkg in packages
        if (quality is None or pkg["score"]["detail"]["quality"] >= quality)
        and (popularity is None or pkg["score"]["detail"]["popularity"] >= popularity)
    ]

    result = {
        "query": query,
        "total": min(int(response.get("numFound", 0)), len(filtered)),
        "packages": filtered,
    }
    services.cache.set(cache_key, result, CacheTTL.SEARCH)
    logger.info(
        "Package search completed",
        extra=extra_context(
            component="search",
            query=query,
            found=response.get("numFound", 0),
            returned=len(filtered),
            filtered=len(packages) - len(filtered),
        ),
    )
    return result

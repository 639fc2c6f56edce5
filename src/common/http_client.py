"""Shared HTTP helpers used across registry and repository clients.

Encapsulates the aiohttp session, the wall-clock timeout and the mapping of
HTTP statuses onto typed errors, so clients only deal with bodies and the
retry layer only deals with typed failures.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Dict, Mapping, Optional

import aiohttp

from common.errors import HttpStatusError, NetworkError, RateLimitError
from common.logging_utils import Timer, extra_context, is_debug_enabled, safe_url
from constants import Constants

logger = logging.getLogger(__name__)


def _parse_retry_after(value: Optional[str]) -> Optional[int]:
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        return None


class HttpClient:
    """Lazily-started aiohttp session with consistent error handling."""

    def __init__(
        self,
        timeout: float = Constants.REQUEST_TIMEOUT,
        user_agent: str = Constants.USER_AGENT,
    ):
        """Initialize the client.

        Args:
            timeout: Total per-request timeout in seconds.
            user_agent: Value sent in the User-Agent header.
        """
        self._timeout = aiohttp.ClientTimeout(total=timeout)
        self._user_agent = user_agent
        self._session: Optional[aiohttp.ClientSession] = None

    async def start(self) -> None:
        """Start the HTTP session."""
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(timeout=self._timeout)

    async def stop(self) -> None:
        """Stop the HTTP session."""
        if self._session is not None:
            await self._session.close()
            self._session = None

    async def __aenter__(self) -> "HttpClient":
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    def _headers(self, headers: Optional[Mapping[str, str]]) -> Dict[str, str]:
        merged = {"User-Agent": self._user_agent}
        if headers:
            merged.update(headers)
        return merged

    async def get_text(
        self,
        url: str,
        *,
        service: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> str:
        """GET ``url`` and return the body text.

        Raises:
            RateLimitError: on HTTP 429.
            HttpStatusError: on any other non-2xx status.
            NetworkError: on timeout.
        """
        await self.start()
        assert self._session is not None
        target = safe_url(url)
        with Timer() as t:
            if is_debug_enabled(logger):
                logger.debug(
                    "HTTP request",
                    extra=extra_context(
                        event="http_request",
                        component="http_client",
                        action="GET",
                        target=target,
                        context=service,
                    ),
                )
            try:
                async with self._session.get(
                    url, params=params, headers=self._headers(headers)
                ) as response:
                    body = await response.text()
                    self._raise_for_status(
                        response.status, response.reason or "", response.headers, url, service
                    )
            except asyncio.TimeoutError as exc:
                logger.warning(
                    "%s request timed out after %s",
                    service,
                    self._timeout.total,
                    extra=extra_context(event="http_timeout", component="http_client", target=target),
                )
                raise NetworkError(f"{service} request timeout", exc) from exc

        if is_debug_enabled(logger):
            logger.debug(
                "HTTP response ok",
                extra=extra_context(
                    event="http_response",
                    component="http_client",
                    action="GET",
                    outcome="success",
                    duration_ms=t.duration_ms(),
                    target=target,
                    context=service,
                ),
            )
        return body

    async def get_json(
        self,
        url: str,
        *,
        service: str,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """GET ``url`` and decode the JSON body."""
        text = await self.get_text(url, service=service, params=params, headers=headers)
        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise NetworkError(f"Invalid JSON from {service}", exc) from exc

    def _raise_for_status(
        self,
        status: int,
        reason: str,
        headers: Mapping[str, str],
        url: str,
        service: str,
    ) -> None:
        if 200 <= status < 300:
            return
        logger.warning(
            "HTTP non-2xx handled",
            extra=extra_context(
                event="http_response",
                component="http_client",
                outcome="handled_non_2xx",
                status_code=status,
                target=safe_url(url),
                context=service,
            ),
        )
        if status == 429:
            raise RateLimitError(service, _parse_retry_after(headers.get("Retry-After")))
        raise HttpStatusError(status, url, reason, {k.lower(): v for k, v in headers.items()})

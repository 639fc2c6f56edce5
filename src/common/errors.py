"""Typed errors raised by the lookup service.

Every failure that crosses a module boundary is one of these. Only the retry
layer (``common.retry.translate_error``) turns a foreign exception into one.
"""
from __future__ import annotations

from typing import Any, Dict, Optional


class LookupServiceError(Exception):
    """Base class carrying a stable error code and an optional HTTP status."""

    def __init__(
        self,
        message: str,
        code: str,
        status_code: Optional[int] = None,
        details: Any = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used by the CLI and tool layer."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.status_code is not None:
            out["status_code"] = self.status_code
        if isinstance(self.details, dict) and self.details:
            out["details"] = self.details
        return out


class PackageNotFoundError(LookupServiceError):
    def __init__(self, package_name: str):
        super().__init__(f"Package '{package_name}' not found", "PACKAGE_NOT_FOUND", 404)
        self.package_name = package_name


class VersionNotFoundError(LookupServiceError):
    """No known version of ``package_name`` satisfies ``version``."""

    def __init__(self, package_name: str, version: str):
        super().__init__(
            f"Version '{version}' of package '{package_name}' not found",
            "VERSION_NOT_FOUND",
            404,
        )
        self.package_name = package_name
        self.version = version


class RateLimitError(LookupServiceError):
    def __init__(self, service: str, retry_after: Optional[int] = None):
        super().__init__(
            f"Rate limit exceeded for {service}",
            "RATE_LIMIT_EXCEEDED",
            429,
            {"retry_after": retry_after},
        )
        self.service = service
        self.retry_after = retry_after


class NetworkError(LookupServiceError):
    def __init__(self, message: str, original_error: Optional[BaseException] = None):
        super().__init__(f"Network error: {message}", "NETWORK_ERROR", None, original_error)
        self.original_error = original_error


class HttpStatusError(LookupServiceError):
    """Non-success HTTP response that is not otherwise classified.

    ``headers`` keys are lowercased.
    """

    def __init__(
        self,
        status_code: int,
        url: str,
        reason: str = "",
        headers: Optional[Dict[str, str]] = None,
    ):
        text = f"HTTP error: {status_code} {reason}".rstrip()
        super().__init__(text, "HTTP_ERROR", status_code, {"url": url})
        self.url = url
        self.headers = headers or {}


class InvalidInputError(LookupServiceError):
    """Malformed caller input; never retried and never cached."""

    def __init__(self, message: str, code: str = "INVALID_INPUT"):
        super().__init__(message, code, 400)


class InvalidPackageNameError(InvalidInputError):
    def __init__(self, package_name: Any):
        super().__init__(
            f"Invalid package name format: '{package_name}'. Expected format: groupId:artifactId",
            "INVALID_PACKAGE_NAME",
        )
        self.package_name = package_name


class InvalidParameterError(InvalidInputError):
    def __init__(self, parameter: str, message: str):
        super().__init__(message, f"INVALID_{parameter.upper()}")
        self.parameter = parameter

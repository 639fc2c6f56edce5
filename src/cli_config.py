"""Runtime configuration: defaults, YAML file, environment and CLI overrides.

Precedence from lowest to highest: built-in defaults, the YAML file named by
``MAVEN_LOOKUP_CONFIG``, environment variables, CLI flags. A bad value at any
layer is logged and skipped so the previous layer's value stays in effect.

Every duration is in seconds, including ``CACHE_TTL`` and ``cache.ttl``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

import yaml

from constants import Constants

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class LookupConfig:
    """Tunables consumed by ``tools.services.LookupServices``."""

    cache_ttl: int = Constants.DEFAULT_CACHE_TTL_SEC
    cache_max_entries: int = Constants.DEFAULT_CACHE_MAX_ENTRIES
    request_timeout: float = Constants.REQUEST_TIMEOUT
    retry_max_attempts: int = Constants.HTTP_RETRY_MAX
    retry_base_delay: float = Constants.HTTP_RETRY_BASE_DELAY_SEC
    github_token: Optional[str] = None
    log_level: str = "INFO"

    def _set(self, field: str, raw: Any, convert: Callable[[Any], Any], source: str) -> None:
        try:
            value = convert(raw)
        except (TypeError, ValueError):
            logger.warning("Ignoring invalid %s from %s: %r", field, source, raw)
            return
        setattr(self, field, value)

    def apply_mapping(self, data: Mapping[str, Any], source: str = "config file") -> "LookupConfig":
        """Apply the ``cache:``, ``http:``, ``github:`` and ``logging:`` sections."""
        cache = data.get("cache") or {}
        http = data.get("http") or {}
        github = data.get("github") or {}
        logging_section = data.get("logging") or {}

        if "ttl" in cache:
            self._set("cache_ttl", cache["ttl"], _positive_int, source)
        if "max_size" in cache:
            self._set("cache_max_entries", cache["max_size"], _positive_int, source)
        if "timeout" in http:
            self._set("request_timeout", http["timeout"], _positive_float, source)
        if "retry_max_attempts" in http:
            self._set("retry_max_attempts", http["retry_max_attempts"], _positive_int, source)
        if "retry_base_delay" in http:
            self._set("retry_base_delay", http["retry_base_delay"], _non_negative_float, source)
        if github.get("token"):
            self.github_token = str(github["token"])
        if "level" in logging_section:
            self._set("log_level", logging_section["level"], _log_level, source)
        return self

    def apply_env(self, env: Mapping[str, str]) -> "LookupConfig":
        if env.get(Constants.ENV_CACHE_TTL):
            self._set("cache_ttl", env[Constants.ENV_CACHE_TTL], _positive_int, Constants.ENV_CACHE_TTL)
        if env.get(Constants.ENV_CACHE_MAX_SIZE):
            self._set(
                "cache_max_entries",
                env[Constants.ENV_CACHE_MAX_SIZE],
                _positive_int,
                Constants.ENV_CACHE_MAX_SIZE,
            )
        if env.get(Constants.ENV_REQUEST_TIMEOUT):
            self._set(
                "request_timeout",
                env[Constants.ENV_REQUEST_TIMEOUT],
                _positive_float,
                Constants.ENV_REQUEST_TIMEOUT,
            )
        if env.get(Constants.ENV_GITHUB_TOKEN):
            self.github_token = env[Constants.ENV_GITHUB_TOKEN].strip() or None
        if env.get(Constants.ENV_LOG_LEVEL):
            self._set("log_level", env[Constants.ENV_LOG_LEVEL], _log_level, Constants.ENV_LOG_LEVEL)
        return self

    def apply_args(self, args: Any) -> "LookupConfig":
        """Apply CLI flags; unset flags (None) leave the current value alone."""
        if getattr(args, "CACHE_TTL", None) is not None:
            self._set("cache_ttl", args.CACHE_TTL, _positive_int, "--cache-ttl")
        if getattr(args, "CACHE_MAX_SIZE", None) is not None:
            self._set("cache_max_entries", args.CACHE_MAX_SIZE, _positive_int, "--cache-max-size")
        if getattr(args, "TIMEOUT", None) is not None:
            self._set("request_timeout", args.TIMEOUT, _positive_float, "--timeout")
        if getattr(args, "LOG_LEVEL", None):
            self._set("log_level", args.LOG_LEVEL, _log_level, "--loglevel")
        return self


def _positive_int(raw: Any) -> int:
    value = int(raw)
    if value <= 0:
        raise ValueError(raw)
    return value


def _positive_float(raw: Any) -> float:
    value = float(raw)
    if value <= 0:
        raise ValueError(raw)
    return value


def _non_negative_float(raw: Any) -> float:
    value = float(raw)
    if value < 0:
        raise ValueError(raw)
    return value


def _log_level(raw: Any) -> str:
    value = str(raw).strip().upper()
    if value not in _LOG_LEVELS:
        raise ValueError(raw)
    return value


def load_yaml_config(path: Optional[str]) -> Dict[str, Any]:
    """Read a YAML mapping from ``path``; missing or malformed files yield ``{}``."""
    if not path:
        return {}
    if not os.path.isfile(path):
        logger.warning("Config file not found: %s", path)
        return {}
    try:
        with open(path, "r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh)
    except (OSError, yaml.YAMLError) as exc:
        logger.error("Failed to load config %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s does not contain a mapping; ignoring", path)
        return {}
    return data


def load_config(args: Any = None, env: Optional[Mapping[str, str]] = None) -> LookupConfig:
    """Build the effective configuration for this process."""
    env = os.environ if env is None else env
    config = LookupConfig()
    config_path = getattr(args, "CONFIG", None) or env.get(Constants.ENV_CONFIG_FILE)
    config.apply_mapping(load_yaml_config(config_path))
    config.apply_env(env)
    if args is not None:
        config.apply_args(args)
    return config

"""maven-lookup - Maven Central metadata lookup and version resolution.

Entry point for the ``mavenlookup`` console script. Direct commands print a
JSON document on stdout; logs always go to stderr.

    Returns:
        int: Exit code
"""
import asyncio
import json
import logging
import sys

from args import parse_args
from cli_config import load_config
from common.errors import LookupServiceError
from common.logging_utils import configure_logging, extra_context
from common.retry import is_fatal
from constants import ExitCodes
from tools import (
    LookupServices,
    get_available_versions,
    get_latest_stable_version,
    resolve_version,
    search_packages,
)
from versioning.parser import tokenize_rightmost_colon

logger = logging.getLogger(__name__)

__version__ = "1.0.0"


def exit_code_for(error):
    """Caller mistakes and missing artifacts exit 1; transport trouble exits 2."""
    if is_fatal(error):
        return ExitCodes.LOOKUP_ERROR.value
    return ExitCodes.CONNECTION_ERROR.value


async def run_command(args, services):
    """Execute one direct command and return its JSON-ready result."""
    if args.COMMAND == "resolve":
        # "group:artifact:version" carries the specifier inline
        package, inline_spec = tokenize_rightmost_colon(args.PACKAGE)
        return await resolve_version(services, package, inline_spec or args.SPEC)
    if args.COMMAND == "versions":
        if args.STABLE:
            return await get_latest_stable_version(services, args.PACKAGE)
        return await get_available_versions(
            services, args.PACKAGE, include_prereleases=not args.NO_PRERELEASES
        )
    if args.COMMAND == "search":
        return await search_packages(services, args.QUERY, args.LIMIT)
    raise ValueError(f"Unknown command: {args.COMMAND}")


async def _run_direct(args, config):
    async with LookupServices.from_config(config) as services:
        return await run_command(args, services)


def main(argv=None):
    """Main function of the program."""
    args = parse_args(argv)
    config = load_config(args)
    configure_logging(config.log_level, json_format=getattr(args, "LOG_JSON", False))

    if args.COMMAND == "mcp":
        from cli_mcp import run_mcp_server  # pylint: disable=import-outside-toplevel
        run_mcp_server(args, config)
        return ExitCodes.SUCCESS.value

    try:
        result = asyncio.run(_run_direct(args, config))
    except LookupServiceError as exc:
        logger.error(
            "%s failed: %s",
            args.COMMAND,
            exc.message,
            extra=extra_context(event="command_failed", component="cli", code=exc.code),
        )
        sys.stdout.write(json.dumps({"error": exc.to_dict()}, indent=2) + "\n")
        return exit_code_for(exc)

    sys.stdout.write(json.dumps(result, indent=2) + "\n")
    return ExitCodes.SUCCESS.value


if __name__ == "__main__":
    sys.exit(main())

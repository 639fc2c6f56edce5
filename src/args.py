"""Argument parsing functionality for maven-lookup."""

import argparse

from constants import Constants


def _add_common_flags(parser):
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'])
    parser.add_argument("--log-json",
                        dest="LOG_JSON",
                        help="Emit log records as JSON lines on stderr",
                        action="store_true")
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help=f"Path to a YAML configuration file (overrides ${Constants.ENV_CONFIG_FILE})",
                        action="store",
                        type=str)
    parser.add_argument("--cache-ttl",
                        dest="CACHE_TTL",
                        help=f"Default cache TTL in seconds, not milliseconds; also read from ${Constants.ENV_CACHE_TTL} (default: {Constants.DEFAULT_CACHE_TTL_SEC})",
                        action="store",
                        type=int)
    parser.add_argument("--cache-max-size",
                        dest="CACHE_MAX_SIZE",
                        help=f"Maximum cache entries (default: {Constants.DEFAULT_CACHE_MAX_ENTRIES})",
                        action="store",
                        type=int)
    parser.add_argument("--timeout",
                        dest="TIMEOUT",
                        help=f"HTTP request timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store",
                        type=float)


def build_parser():
    """Build the top-level parser with one sub-parser per command."""
    parser = argparse.ArgumentParser(
        prog="mavenlookup",
        description="maven-lookup - Maven Central metadata, version resolution and README lookup",
        add_help=True,
    )
    subparsers = parser.add_subparsers(dest="COMMAND", metavar="COMMAND")
    subparsers.required = True

    mcp = subparsers.add_parser("mcp", help="Serve the lookup tools over MCP (stdio by default)")
    _add_common_flags(mcp)
    mcp.add_argument("--host",
                     dest="MCP_HOST",
                     help="Bind host for streamable HTTP transport",
                     action="store",
                     type=str)
    mcp.add_argument("--port",
                     dest="MCP_PORT",
                     help="Bind port for streamable HTTP transport",
                     action="store",
                     type=int)

    resolve = subparsers.add_parser("resolve", help="Resolve a version specifier to a published version")
    _add_common_flags(resolve)
    resolve.add_argument("PACKAGE", help="Coordinate as groupId:artifactId")
    resolve.add_argument("SPEC",
                         nargs="?",
                         default="latest",
                         help="latest, an exact version, or a range such as [1.5,2.0)")

    versions = subparsers.add_parser("versions", help="List published versions, newest first")
    _add_common_flags(versions)
    versions.add_argument("PACKAGE", help="Coordinate as groupId:artifactId")
    versions.add_argument("--stable",
                          dest="STABLE",
                          help="Print only the latest stable version",
                          action="store_true")
    versions.add_argument("--no-prereleases",
                          dest="NO_PRERELEASES",
                          help="Leave pre-release versions out of the listing",
                          action="store_true")

    search = subparsers.add_parser("search", help="Search Maven Central")
    _add_common_flags(search)
    search.add_argument("QUERY", help="Free-text or Solr query")
    search.add_argument("--limit",
                        dest="LIMIT",
                        help=f"Maximum results (1-{Constants.SEARCH_MAX_LIMIT}, default {Constants.SEARCH_DEFAULT_LIMIT})",
                        action="store",
                        type=int,
                        default=Constants.SEARCH_DEFAULT_LIMIT)

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)

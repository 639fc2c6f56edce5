"""Tool functions exposed over MCP and the CLI.

Each tool takes an explicit ``LookupServices`` container as its first
argument and returns a JSON-serializable dict.
"""

from .get_package_info import get_package_info
from .get_package_readme import get_package_readme
from .search_packages import search_packages
from .services import LookupServices
from .versions import get_available_versions, get_latest_stable_version, resolve_version

__all__ = [
    "LookupServices",
    "get_available_versions",
    "get_latest_stable_version",
    "get_package_info",
    "get_package_readme",
    "resolve_version",
    "search_packages",
]

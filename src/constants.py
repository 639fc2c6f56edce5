"""Constants used in the project."""

from enum import Enum


class ExitCodes(Enum):
    """Exit codes for the program.

    Args:
        Enum (int): Exit codes for the program.
    """

    SUCCESS = 0
    LOOKUP_ERROR = 1
    CONNECTION_ERROR = 2


class CacheTTL:  # pylint: disable=too-few-public-methods
    """Per-operation cache lifetimes in seconds."""

    VERSIONS = 1800
    POM = 3600
    PACKAGE_EXISTS = 1800
    SEARCH = 300
    PACKAGE_INFO = 1800
    PACKAGE_README = 1800
    GITHUB_README = 1800


class Constants:  # pylint: disable=too-few-public-methods
    """General constants used in the project.
    Data holder for configuration constants; not intended to provide behavior.
    """

    REGISTRY_URL_MAVEN = "https://search.maven.org/solrsearch/select"
    REPO_URL_MAVEN = "https://repo1.maven.org/maven2"
    GITHUB_API_BASE = "https://api.github.com"
    USER_AGENT = "maven-lookup/1.0.0"

    LOG_FORMAT = "[%(levelname)s] %(message)s"
    REQUEST_TIMEOUT = 30  # Timeout in seconds for all HTTP requests

    DEFAULT_CACHE_TTL_SEC = 3600
    DEFAULT_CACHE_MAX_ENTRIES = 100

    HTTP_RETRY_MAX = 3
    HTTP_RETRY_BASE_DELAY_SEC = 1.0

    SEARCH_DEFAULT_LIMIT = 20
    SEARCH_MAX_LIMIT = 250
    SEARCH_MAX_QUERY_LENGTH = 500
    VERSION_MAX_LENGTH = 128
    VERSIONS_QUERY_ROWS = 100
    MAX_USAGE_EXAMPLES = 10

    ENV_CONFIG_FILE = "MAVEN_LOOKUP_CONFIG"
    ENV_CACHE_TTL = "CACHE_TTL"
    ENV_CACHE_MAX_SIZE = "CACHE_MAX_SIZE"
    ENV_REQUEST_TIMEOUT = "REQUEST_TIMEOUT"
    ENV_GITHUB_TOKEN = "GITHUB_TOKEN"
    ENV_LOG_LEVEL = "LOG_LEVEL"

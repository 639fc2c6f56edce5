"""Maven Central registry package.

- client.py: search, version listing and POM retrieval against Maven Central
- pom.py: POM parsing into the fields the tools report
"""

from .client import MavenCentralClient
from .pom import PomInfo, parse_pom_xml

__all__ = [
    "MavenCentralClient",
    "PomInfo",
    "parse_pom_xml",
]

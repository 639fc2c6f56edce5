"""Version resolvers."""

from .maven import MavenVersionResolver

__all__ = [
    "MavenVersionResolver",
]

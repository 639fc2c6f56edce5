"""Tests for MavenVersionResolver against an in-memory registry."""

import asyncio

import pytest

from common.errors import PackageNotFoundError, VersionNotFoundError
from conftest import FakeRegistry
from versioning.resolvers import MavenVersionResolver

KNOWN = ["2.1.0", "2.0.0", "1.9.0", "1.8.0", "1.5.0", "1.4.0"]


@pytest.fixture
def registry():
    return FakeRegistry(versions={"group:artifact": list(KNOWN)})


@pytest.fixture
def resolver(registry):
    return MavenVersionResolver(registry)


class TestResolveVersion:
    def test_latest_is_first_listed(self, resolver):
        assert asyncio.run(resolver.resolve_version("group", "artifact")) == "2.1.0"
        assert asyncio.run(resolver.resolve_version("group", "artifact", "")) == "2.1.0"

    def test_range_picks_highest_match(self, resolver):
        assert asyncio.run(resolver.resolve_version("group", "artifact", "[1.5,2.0)")) == "1.9.0"

    def test_inclusive_upper_bound(self, resolver):
        assert asyncio.run(resolver.resolve_version("group", "artifact", "[1.5,2.0.0]")) == "2.0.0"

    def test_unbounded_range_matches_everything(self, resolver):
        assert asyncio.run(resolver.resolve_version("group", "artifact", "[,]")) == "2.1.0"

    def test_empty_range_raises_with_range_text(self, resolver):
        with pytest.raises(VersionNotFoundError) as excinfo:
            asyncio.run(resolver.resolve_version("group", "artifact", "[3.0,4.0)"))
        assert excinfo.value.version == "[3.0,4.0)"
        assert excinfo.value.package_name == "group:artifact"

    def test_exact_existing(self, resolver, registry):
        assert asyncio.run(resolver.resolve_version("group", "artifact", "1.8.0")) == "1.8.0"
        assert ("version_exists", "group", "artifact", "1.8.0") in registry.calls

    def test_exact_missing(self, resolver):
        with pytest.raises(VersionNotFoundError) as excinfo:
            asyncio.run(resolver.resolve_version("group", "artifact", "9.9.9"))
        assert excinfo.value.package_name == "group:artifact"
        assert excinfo.value.version == "9.9.9"
        assert "9.9.9" in str(excinfo.value) and "group:artifact" in str(excinfo.value)

    def test_literal_spec_checked_verbatim(self, resolver):
        with pytest.raises(VersionNotFoundError) as excinfo:
            asyncio.run(resolver.resolve_version("group", "artifact", "RELEASE"))
        assert excinfo.value.version == "RELEASE"

    def test_missing_package_is_package_not_found(self, resolver):
        with pytest.raises(PackageNotFoundError):
            asyncio.run(resolver.resolve_version("nope", "missing"))
        with pytest.raises(PackageNotFoundError) as excinfo:
            asyncio.run(resolver.resolve_version("nope", "missing", "[1.0,)"))
        assert excinfo.value.code == "PACKAGE_NOT_FOUND"


class TestLatestStable:
    def test_skips_prereleases(self):
        registry = FakeRegistry(versions={"g:a": ["2.0.0-SNAPSHOT", "1.9.0-rc1", "1.8.0", "1.7.0-beta"]})
        assert asyncio.run(MavenVersionResolver(registry).get_latest_stable_version("g", "a")) == "1.8.0"

    def test_falls_back_to_first_when_all_prerelease(self):
        registry = FakeRegistry(versions={"g:a": ["2.0.0-SNAPSHOT", "1.9.0-rc1", "1.7.0-beta"]})
        assert asyncio.run(MavenVersionResolver(registry).get_latest_stable_version("g", "a")) == "2.0.0-SNAPSHOT"

    def test_empty_listing_is_package_not_found(self):
        registry = FakeRegistry(versions={"g:a": []})
        with pytest.raises(PackageNotFoundError):
            asyncio.run(MavenVersionResolver(registry).get_latest_stable_version("g", "a"))


class TestHelpers:
    def test_available_versions_passthrough(self, resolver):
        assert asyncio.run(resolver.get_available_versions("group", "artifact")) == KNOWN

    def test_is_prerelease_static(self):
        assert MavenVersionResolver.is_prerelease("1.0-RC1")
        assert not MavenVersionResolver.is_prerelease("1.0")

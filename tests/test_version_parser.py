"""Tests for coordinate and version spec parsing."""

import pytest

from common.errors import InvalidPackageNameError
from versioning.models import RangeBound, ResolutionMode
from versioning.parser import (
    is_range,
    parse_coordinate,
    parse_version_spec,
    tokenize_rightmost_colon,
)


class TestParseVersionSpec:
    @pytest.mark.parametrize("raw", [None, "", "  ", "latest"])
    def test_latest(self, raw):
        spec = parse_version_spec(raw)
        assert spec.mode is ResolutionMode.LATEST
        assert spec.raw == "latest"

    @pytest.mark.parametrize("raw", ["1", "1.2.3", "2.0.0-SNAPSHOT", "1.0-alpha-1", "31.1-jre"])
    def test_exact(self, raw):
        spec = parse_version_spec(raw)
        assert spec.mode is ResolutionMode.EXACT
        assert not spec.literal
        assert spec.raw == raw

    def test_range_bounds_and_inclusivity(self):
        spec = parse_version_spec("[1.5, 2.0)")
        assert spec.mode is ResolutionMode.RANGE
        assert spec.lower == RangeBound("1.5", True)
        assert spec.upper == RangeBound("2.0", False)

    def test_open_sides_are_unbounded(self):
        spec = parse_version_spec("(,1.0]")
        assert spec.lower == RangeBound(None, False)
        assert spec.upper == RangeBound("1.0", True)

    def test_range_without_comma_is_lower_bound_only(self):
        spec = parse_version_spec("[1.5]")
        assert spec.lower == RangeBound("1.5", True)
        assert spec.upper.value is None

    @pytest.mark.parametrize("raw", ["1.0.Final", "RELEASE", "v2"])
    def test_literal_fallback(self, raw):
        spec = parse_version_spec(raw)
        assert spec.mode is ResolutionMode.EXACT
        assert spec.literal

    def test_too_short_brackets_are_not_ranges(self):
        assert not is_range("[]")
        assert parse_version_spec("[]").literal


class TestParseCoordinate:
    def test_valid(self):
        coord = parse_coordinate(" org.slf4j:slf4j-api ")
        assert coord.group_id == "org.slf4j"
        assert coord.artifact_id == "slf4j-api"
        assert coord.name == "org.slf4j:slf4j-api"

    @pytest.mark.parametrize("bad", ["", "guava", "a:b:c", ":a", "g:", "g a:b", None, 42])
    def test_invalid(self, bad):
        with pytest.raises(InvalidPackageNameError):
            parse_coordinate(bad)


class TestTokenizeRightmostColon:
    def test_without_version(self):
        assert tokenize_rightmost_colon("org.slf4j:slf4j-api") == ("org.slf4j:slf4j-api", None)

    def test_with_version(self):
        assert tokenize_rightmost_colon("org.slf4j:slf4j-api:2.0.9") == ("org.slf4j:slf4j-api", "2.0.9")

    def test_trailing_colon(self):
        assert tokenize_rightmost_colon("g:a:") == ("g:a", None)

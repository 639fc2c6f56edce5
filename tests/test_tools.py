"""Tests for the lookup tools driven by in-memory fakes."""

import asyncio

import pytest

from common.errors import (
    InvalidPackageNameError,
    InvalidParameterError,
    NetworkError,
    PackageNotFoundError,
    VersionNotFoundError,
)
from conftest import FakeRegistry, FakeSourceHost, make_services
from tools import (
    get_available_versions,
    get_latest_stable_version,
    get_package_info,
    get_package_readme,
    resolve_version,
    search_packages,
)
from tools.get_package_info import estimate_download_stats

NOW_MS = 1_700_000_000_000
DAY_MS = 86_400_000

WIDGET = "org.example:widget"


def _pom(version, scm="https://github.com/example/widget", organization="<organization><name>Example Org</name></organization>"):
    scm_block = f"<scm><url>{scm}</url></scm>" if scm else ""
    return f"""<project>
  <groupId>org.example</groupId>
  <artifactId>widget</artifactId>
  <version>{version}</version>
  <name>Widget</name>
  <description>Makes widgets.</description>
  <url>https://example.org/widget</url>
  <licenses><license><name>MIT</name></license></licenses>
  {organization}
  <developers><developer><name>Ada</name><organization>Ada Labs</organization></developer></developers>
  {scm_block}
  <dependencies>
    <dependency><groupId>org.slf4j</groupId><artifactId>slf4j-api</artifactId><version>2.0.9</version></dependency>
    <dependency><groupId>org.junit</groupId><artifactId>junit-jupiter</artifactId><version>5.10.0</version><scope>test</scope></dependency>
  </dependencies>
</project>"""


README = """# Widget

## Usage

Build a widget and render it.

```java
Widget w = new Widget();
w.render(System.out);
```
"""


def _registry(**overrides):
    poms = {
        f"{WIDGET}:2.1.0": _pom("2.1.0"),
        f"{WIDGET}:1.5.0": _pom("1.5.0"),
    }
    poms.update(overrides.pop("poms", {}))
    return FakeRegistry(
        versions={WIDGET: ["2.1.0", "2.0.0-beta1", "1.5.0", "1.0.0"]},
        poms=poms,
        **overrides,
    )


class TestGetPackageReadme:
    def test_latest_with_github_readme(self):
        host = FakeSourceHost({"example/widget": README})
        services = make_services(_registry(), source_host=host)

        result = asyncio.run(get_package_readme(services, WIDGET))

        assert result["exists"] is True
        assert result["version"] == "2.1.0"
        assert result["readme_content"].startswith("# Widget")
        assert result["usage_examples"][0]["language"] == "java"
        assert "<version>2.1.0</version>" in result["installation"]["maven"]
        assert result["repository"] == {"type": "git", "url": "https://github.com/example/widget"}
        assert result["basic_info"]["license"] == "MIT"
        assert host.calls == [("example", "widget")]

    def test_range_resolves_to_highest_match(self):
        services = make_services(_registry(), source_host=FakeSourceHost({"example/widget": README}))
        result = asyncio.run(get_package_readme(services, WIDGET, "[1.0,1.9]"))
        assert result["version"] == "1.5.0"

    def test_missing_package_reports_not_found(self):
        registry = _registry()
        result = asyncio.run(get_package_readme(make_services(registry), "org.example:nope"))
        assert result["exists"] is False
        assert result["version"] == "latest"
        assert result["basic_info"]["description"] == "Package not found"
        assert not any(call[0] == "get_pom_xml" for call in registry.calls)

    def test_missing_version_reports_not_found(self):
        result = asyncio.run(get_package_readme(make_services(_registry()), WIDGET, "9.9.9"))
        assert result["exists"] is False
        assert result["version"] == "9.9.9"

    def test_source_host_failure_falls_back_to_generated_readme(self):
        host = FakeSourceHost(error=NetworkError("down"))
        result = asyncio.run(get_package_readme(make_services(_registry(), source_host=host), WIDGET))
        assert result["exists"] is True
        assert result["readme_content"].startswith("# Widget")
        assert "Makes widgets." in result["readme_content"]

    def test_non_github_scm_skips_source_host(self):
        registry = _registry(poms={f"{WIDGET}:2.1.0": _pom("2.1.0", scm="https://gitlab.com/example/widget")})
        host = FakeSourceHost({"example/widget": README})
        asyncio.run(get_package_readme(make_services(registry, source_host=host), WIDGET))
        assert host.calls == []

    def test_examples_toggle_shares_one_cache_entry(self):
        registry = _registry()
        host = FakeSourceHost({"example/widget": README})
        services = make_services(registry, source_host=host)

        without = asyncio.run(get_package_readme(services, WIDGET, include_examples=False))
        with_examples = asyncio.run(get_package_readme(services, WIDGET, include_examples=True))

        assert without["usage_examples"] == []
        assert len(with_examples["usage_examples"]) == 1
        assert len(host.calls) == 1

    def test_invalid_arguments(self):
        services = make_services(_registry())
        with pytest.raises(InvalidPackageNameError):
            asyncio.run(get_package_readme(services, "widget"))
        with pytest.raises(InvalidParameterError):
            asyncio.run(get_package_readme(services, WIDGET, "1.0 final"))


class TestGetPackageInfo:
    def test_summary_of_latest_release(self):
        result = asyncio.run(get_package_info(make_services(_registry()), WIDGET))
        assert result["latest_version"] == "2.1.0"
        assert result["description"] == "Makes widgets."
        assert result["organization"] == "Example Org"
        assert result["license"] == "MIT"
        assert result["dependencies"] == {"org.slf4j:slf4j-api": "2.0.9"}
        assert result["test_dependencies"] is None
        assert result["download_stats"] == {"last_day": 0, "last_week": 0, "last_month": 0}
        assert result["repository"]["type"] == "git"

    def test_dependency_flags_share_one_cache_entry(self):
        registry = _registry()
        services = make_services(registry)

        bare = asyncio.run(get_package_info(services, WIDGET, include_dependencies=False))
        full = asyncio.run(get_package_info(services, WIDGET, include_dev_dependencies=True))

        assert bare["dependencies"] is None
        assert full["test_dependencies"] == {"org.junit:junit-jupiter": "5.10.0"}
        assert sum(1 for call in registry.calls if call[0] == "get_pom_xml") == 1

    def test_organization_falls_back_to_developer(self):
        registry = _registry(poms={f"{WIDGET}:2.1.0": _pom("2.1.0", organization="")})
        result = asyncio.run(get_package_info(make_services(registry), WIDGET))
        assert result["organization"] == "Ada Labs"

    def test_unknown_package_is_package_not_found(self):
        with pytest.raises(PackageNotFoundError):
            asyncio.run(get_package_info(make_services(_registry()), "org.example:nope"))


class TestEstimateDownloadStats:
    def test_scaled_from_days_since_upload(self):
        registry = FakeRegistry(search_docs=[{"g": "org.example", "a": "widget", "timestamp": NOW_MS - 100 * DAY_MS}])
        stats = asyncio.run(estimate_download_stats(make_services(registry), "org.example", "widget", now_ms=NOW_MS))
        assert stats == {"last_day": 10, "last_week": 70, "last_month": 100}

    def test_fresh_upload_counts_at_least_one_day(self):
        registry = FakeRegistry(search_docs=[{"g": "org.example", "a": "widget", "timestamp": NOW_MS}])
        stats = asyncio.run(estimate_download_stats(make_services(registry), "org.example", "widget", now_ms=NOW_MS))
        assert stats["last_month"] == 1

    def test_lookup_failure_gives_zeros(self):
        class FailingRegistry(FakeRegistry):
            async def first_search_doc(self, group_id, artifact_id):
                raise NetworkError("timeout")

        stats = asyncio.run(estimate_download_stats(make_services(FailingRegistry()), "g", "a", now_ms=NOW_MS))
        assert stats == {"last_day": 0, "last_week": 0, "last_month": 0}


SEARCH_DOCS = [
    {"g": "com.google.guava", "a": "guava", "v": "33.0.0", "timestamp": NOW_MS - 5 * DAY_MS, "tags": ["collections"]},
    {"g": "widgets", "a": "w", "v": "0.1-SNAPSHOT"},
]


class TestSearchPackages:
    def test_results_are_scored(self):
        registry = FakeRegistry(search_docs=SEARCH_DOCS, num_found=100)
        result = asyncio.run(search_packages(make_services(registry), "guava", now_ms=NOW_MS))

        assert result["query"] == "guava"
        assert result["total"] == 2
        first = result["packages"][0]
        assert first["groupId"] == "com.google.guava"
        assert first["organization"] == "com.google"
        assert first["keywords"] == ["collections"]
        assert first["repositoryId"] == "central"
        assert first["score"]["final"] == first["searchScore"] == 1.0
        assert registry.calls == [("search_packages", "guava", 20, 0)]

    def test_minimum_scores_filter_results(self):
        registry = FakeRegistry(search_docs=SEARCH_DOCS)
        result = asyncio.run(search_packages(make_services(registry), "x", quality=0.5, now_ms=NOW_MS))
        assert [p["artifactId"] for p in result["packages"]] == ["guava"]
        assert result["total"] == 1

    def test_total_capped_by_upstream_count(self):
        registry = FakeRegistry(search_docs=SEARCH_DOCS, num_found=1)
        result = asyncio.run(search_packages(make_services(registry), "x", now_ms=NOW_MS))
        assert len(result["packages"]) == 2
        assert result["total"] == 1

    def test_repeat_search_is_cached(self):
        registry = FakeRegistry(search_docs=SEARCH_DOCS)
        services = make_services(registry)
        asyncio.run(search_packages(services, "guava", limit=5))
        asyncio.run(search_packages(services, "guava", limit=5))
        asyncio.run(search_packages(services, "guava", limit=6))
        assert len(registry.calls) == 2

    def test_invalid_limit_rejected_before_upstream_call(self):
        registry = FakeRegistry(search_docs=SEARCH_DOCS)
        with pytest.raises(InvalidParameterError):
            asyncio.run(search_packages(make_services(registry), "guava", limit=0))
        assert registry.calls == []


class TestVersionTools:
    @pytest.mark.parametrize("spec,resolved,mode,prerelease", [
        ("latest", "2.1.0", "latest", False),
        ("2.0.0-beta1", "2.0.0-beta1", "exact", True),
        ("[1.0,1.9]", "1.5.0", "range", False),
        ("[1.0,2.0)", "2.0.0-beta1", "range", True),
        ("[2.0]", "2.1.0", "range", False),
    ])
    def test_resolve_version(self, spec, resolved, mode, prerelease):
        result = asyncio.run(resolve_version(make_services(_registry()), WIDGET, spec))
        assert result == {
            "package_name": WIDGET,
            "requested": spec,
            "resolved_version": resolved,
            "mode": mode,
            "is_prerelease": prerelease,
        }

    def test_unsatisfiable_range(self):
        with pytest.raises(VersionNotFoundError):
            asyncio.run(resolve_version(make_services(_registry()), WIDGET, "[3.0,4.0)"))

    def test_oversized_range_bound_is_invalid_input(self):
        registry = _registry()
        with pytest.raises(InvalidParameterError):
            asyncio.run(resolve_version(make_services(registry), WIDGET, "[1" + "0" * 5000 + ",)"))
        assert registry.calls == []

    def test_unknown_package_differs_from_unsatisfied_range(self):
        with pytest.raises(PackageNotFoundError) as excinfo:
            asyncio.run(resolve_version(make_services(_registry()), "org.example:nope", "[1.0,)"))
        assert excinfo.value.package_name == "org.example:nope"

    def test_available_versions(self):
        services = make_services(_registry())
        everything = asyncio.run(get_available_versions(services, WIDGET))
        stable = asyncio.run(get_available_versions(services, WIDGET, include_prereleases=False))
        assert everything["count"] == 4
        assert stable["versions"] == ["2.1.0", "1.5.0", "1.0.0"]

    def test_latest_stable(self):
        registry = FakeRegistry(versions={WIDGET: ["3.0.0-rc1", "2.9.1", "2.9.0"]})
        result = asyncio.run(get_latest_stable_version(make_services(registry), WIDGET))
        assert result == {"package_name": WIDGET, "version": "2.9.1", "is_prerelease": False}

    def test_latest_stable_when_all_prereleases(self):
        registry = FakeRegistry(versions={WIDGET: ["2.0.0-alpha2", "2.0.0-alpha1"]})
        result = asyncio.run(get_latest_stable_version(make_services(registry), WIDGET))
        assert result["version"] == "2.0.0-alpha2"
        assert result["is_prerelease"] is True

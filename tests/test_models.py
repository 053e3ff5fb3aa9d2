"""Tests for the data models."""

import pytest
from pydantic import ValidationError

from fundamental.models import (
    Contributor,
    ContributorRecord,
    CrawlStrategy,
    Dependency,
    FundingReport,
    PackageNode,
    RunConfig,
    SkippedPackage,
    SkipReason,
    SortField,
    SortOrder,
)


class TestRunConfig:
    def test_defaults(self):
        config = RunConfig(package="serde")
        assert config.include_dev is False
        assert config.max_depth == 1000
        assert config.sort_by == SortField.contributions
        assert config.strategy == CrawlStrategy.lifo

    def test_contributions_default_descending(self):
        assert RunConfig(package="x").effective_ordering == SortOrder.descending

    def test_sponsors_default_ascending(self):
        config = RunConfig(package="x", sort_by=SortField.sponsors)
        assert config.effective_ordering == SortOrder.ascending

    def test_explicit_ordering_wins(self):
        config = RunConfig(
            package="x", sort_by=SortField.sponsors, ordering=SortOrder.descending
        )
        assert config.effective_ordering == SortOrder.descending

    def test_negative_depth_rejected(self):
        with pytest.raises(ValidationError):
            RunConfig(package="x", max_depth=-1)

    def test_empty_package_rejected(self):
        with pytest.raises(ValidationError):
            RunConfig(package="")


class TestSmallModels:
    def test_dev_dependency(self):
        assert Dependency(name="proptest", kind="dev").is_dev
        assert not Dependency(name="serde").is_dev

    def test_contributor_kinds(self):
        assert Contributor(login="alice").is_individual
        assert not Contributor(login="dependabot[bot]", account_type="Bot").is_individual
        assert not Contributor(login="acme", account_type="Organization").is_individual

    def test_package_node_starts_unfunded(self):
        assert PackageNode(name="serde").funding_links == []

    def test_sponsors_url(self):
        assert ContributorRecord(login="alice").sponsors_url == "https://github.com/sponsors/alice"


class TestFundingReport:
    def test_counts(self):
        report = FundingReport(
            root="alpha",
            packages={"alpha": PackageNode(name="alpha")},
            crawl_failures={"beta": "not found"},
            skipped=[SkippedPackage(package="gamma", reason=SkipReason.data)],
        )
        assert report.total_packages == 1
        assert report.problem_count == 2

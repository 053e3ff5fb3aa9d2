"""Pytest configuration and fixtures."""

import pytest

from fundamental.errors import FetchError, NotFoundError
from fundamental.models import Contributor, Dependency, RegistryPackage, Sponsorship


@pytest.fixture(scope="session")
def anyio_backend():
    """Configure anyio backend for async tests."""
    return "asyncio"


class FakeRegistry:
    """In-memory stand-in for CratesIoClient.

    ``graph`` maps a crate to its dependencies; a dependency is either a
    name (normal) or a ``(name, kind)`` tuple.
    """

    def __init__(self, graph, repos=None, failing=(), fail_once=()):
        self.graph = graph
        self.repos = repos or {}
        self.failing = set(failing)
        self.fail_once = set(fail_once)
        self.calls: list[str] = []

    async def fetch_package(self, name):
        self.calls.append(name)
        if name in self.fail_once:
            self.fail_once.discard(name)
            raise FetchError(f"crates.io request for {name} failed")
        if name in self.failing or name not in self.graph:
            raise NotFoundError(f"crates.io: {name} not found", status_code=404)
        return RegistryPackage(
            name=name, repository=self.repos.get(name), latest_version="1.0.0"
        )

    async def fetch_dependencies(self, name, version):
        deps = []
        for entry in self.graph[name]:
            dep_name, kind = entry if isinstance(entry, tuple) else (entry, "normal")
            deps.append(Dependency(name=dep_name, kind=kind))
        return deps

    async def close(self):
        pass


class FakeFetcher:
    """In-memory stand-in for GitHubFetcher keyed by ``owner/name``."""

    def __init__(
        self,
        funding=None,
        contributors=None,
        sponsors=None,
        failing_repos=(),
        failing_users=(),
    ):
        self.funding = funding or {}
        self.contributors = contributors or {}
        self.sponsors = sponsors or {}
        self.failing_repos = set(failing_repos)
        self.failing_users = set(failing_users)
        self.repo_calls: list[str] = []
        self.sponsor_calls: list[str] = []

    async def fetch_repo_info(self, owner, repo):
        slug = f"{owner}/{repo}"
        self.repo_calls.append(slug)
        if slug in self.failing_repos:
            raise FetchError(f"GitHub API error (500) on /repos/{slug}", status_code=500)
        if slug not in self.funding and slug not in self.contributors:
            raise NotFoundError(f"GitHub: /repos/{slug} not found", status_code=404)
        url = f"https://api.github.com/repos/{slug}/contributors"
        return {"full_name": slug, "contributors_url": url}

    async def fetch_funding_links(self, owner, repo):
        return list(self.funding.get(f"{owner}/{repo}", []))

    async def fetch_contributors(self, contributors_url):
        slug = contributors_url.split("/repos/")[1].rsplit("/contributors", 1)[0]
        return [
            Contributor(login=login, account_type=kind, contributions=count)
            for login, kind, count in self.contributors.get(slug, [])
        ]

    async def fetch_sponsorship(self, login):
        self.sponsor_calls.append(login)
        if login in self.failing_users:
            raise FetchError(f"GitHub GraphQL error for {login}")
        listed, count = self.sponsors.get(login, (False, 0))
        return Sponsorship(has_sponsors_listing=listed, sponsor_count=count)

    async def close(self):
        pass


@pytest.fixture
def fake_registry_cls():
    return FakeRegistry


@pytest.fixture
def fake_fetcher_cls():
    return FakeFetcher

"""Funding resolution for crawled packages hosted on GitHub."""

import asyncio
import logging
from collections.abc import Iterable
from typing import Callable, Optional

from fundamental.aggregator import ContributorAggregator
from fundamental.errors import DataShapeError, FetchError
from fundamental.locator import locate_repository, require_owner
from fundamental.models import (
    PackageNode,
    RepoFundingInfo,
    SkippedPackage,
    SkipReason,
    Sponsorship,
    UserFundingInfo,
)

logger = logging.getLogger(__name__)


class FundingResolver:
    """Attaches funding links to packages and feeds sponsorable contributors
    into a ``ContributorAggregator``.

    Repository data is cached per ``owner/name`` and sponsorship data per
    login for the lifetime of the resolver. A repository is all-or-nothing:
    if any call for it fails, nothing from it is kept.
    """

    def __init__(
        self,
        fetcher,
        aggregator: Optional[ContributorAggregator] = None,
        lookup_concurrency: int = 4,
        on_status: Optional[Callable[[str], None]] = None,
    ) -> None:
        self.fetcher = fetcher
        self.aggregator = aggregator if aggregator is not None else ContributorAggregator()
        self.skipped: list[SkippedPackage] = []
        self._on_status = on_status or (lambda _: None)
        self._semaphore = asyncio.Semaphore(lookup_concurrency)
        self._repo_cache: dict[tuple[str, str], RepoFundingInfo] = {}
        self._sponsor_cache: dict[str, Sponsorship] = {}

    # ── GitHub lookups ────────────────────────────────────────────────────

    async def _sponsorship(self, login: str) -> Sponsorship:
        cached = self._sponsor_cache.get(login)
        if cached is not None:
            return cached
        async with self._semaphore:
            sponsorship = await self.fetcher.fetch_sponsorship(login)
        self._sponsor_cache[login] = sponsorship
        return sponsorship

    async def fetch_repo_funding(self, owner: str, name: str) -> RepoFundingInfo:
        """Gather funding links and sponsorable contributors for one repo."""
        key = (owner, name)
        if key in self._repo_cache:
            return self._repo_cache[key]

        repo_info = await self.fetcher.fetch_repo_info(owner, name)
        funding_links = await self.fetcher.fetch_funding_links(owner, name)

        fundable: list[UserFundingInfo] = []
        contributors_url = repo_info.get("contributors_url")
        if contributors_url:
            people = [
                c
                for c in await self.fetcher.fetch_contributors(contributors_url)
                if c.is_individual
            ]
            results = await asyncio.gather(
                *(self._sponsorship(c.login) for c in people),
                return_exceptions=True,
            )
            for result in results:
                if isinstance(result, BaseException):
                    raise result
            for person, sponsorship in zip(people, results):
                if sponsorship.has_sponsors_listing:
                    fundable.append(
                        UserFundingInfo(
                            login=person.login,
                            sponsor_count=sponsorship.sponsor_count,
                            contributions=person.contributions,
                            crates=1,
                        )
                    )

        info = RepoFundingInfo(
            owner=owner,
            name=name,
            funding_links=funding_links,
            fundable_users=fundable,
        )
        self._repo_cache[key] = info
        return info

    # ── Packages ──────────────────────────────────────────────────────────

    def _skip(self, node: PackageNode, reason: SkipReason, message: str) -> None:
        self.skipped.append(
            SkippedPackage(package=node.name, reason=reason, message=message)
        )

    async def resolve_package(self, node: PackageNode) -> Optional[RepoFundingInfo]:
        """Resolve one package; returns ``None`` if it was not resolved."""
        location = locate_repository(node.repository)
        if location is None:
            logger.debug("%s is not hosted on GitHub (%s)", node.name, node.repository)
            return None
        try:
            owner, name = require_owner(location)
        except DataShapeError as e:
            logger.warning("Skipping %s: %s", node.name, e)
            self._skip(node, SkipReason.data, str(e))
            return None

        self._on_status(f"Resolving funding for {node.name} ({location.slug}) …")
        try:
            info = await self.fetch_repo_funding(owner, name)
        except FetchError as e:
            logger.error("Error resolving funding for %s: %s", node.name, e)
            self._skip(node, SkipReason.fetch, str(e))
            return None

        node.funding_links = list(info.funding_links)
        self.aggregator.add_all(info.fundable_users)
        return info

    async def resolve(self, nodes: Iterable[PackageNode]) -> ContributorAggregator:
        """Resolve packages in discovery order."""
        for node in sorted(nodes, key=lambda n: n.sequence):
            await self.resolve_package(node)
        logger.info(
            "Funding resolved: %d contributors, %d packages skipped",
            len(self.aggregator),
            len(self.skipped),
        )
        return self.aggregator
